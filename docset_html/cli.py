"""Cyclopts CLI entrypoint for assembling partially rendered documentation.

The ``docset-html`` console script defined here finishes output rendered with
``delay_template_substitution`` enabled: it walks the output directory, reads
each page's command manifest and resolves path-to-root tokens, the project
name, cross-module links, the version selector and the navigation menu.

Examples
--------
Assemble a site rendered module by module:

>>> from docset_html.cli import app
>>> app.run(
...     ["assemble", "public", "--project-name", "kotlinx.coroutines"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec
from cyclopts import App, Parameter

from .config import RendererConfigError, load_renderer_config
from .logger import VERBOSITY_WARNINGS, setup_logger
from .templating.assembly import ManifestError, assemble_directory

app = App(name="docset-html", config=cyclopts.config.Env("DOCSET_", command=False))  # type: ignore[unknown-argument]

_link_index_decoder = msgspec.json.Decoder(dict[str, str])


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _parse_links(links: str | None) -> dict[str, str]:
    """Decode the ``--links`` JSON object mapping reference targets to paths."""
    if not links:
        return {}
    try:
        return _link_index_decoder.decode(links)
    except msgspec.DecodeError as exc:
        msg = f"--links must be a JSON object of strings: {exc}"
        raise ValueError(msg) from exc


@app.command(help="Resolve deferred template commands in partial output.")
def assemble(
    output_dir: typ.Annotated[Path, Parameter(help="Rendered site directory")],
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Renderer config supplying the module name")
    ] = None,
    project_name: typ.Annotated[
        str | None, Parameter(help="Project name (overrides the config)")
    ] = None,
    links: typ.Annotated[
        str | None,
        Parameter(help="JSON object mapping reference targets to root paths"),
    ] = None,
    versions: typ.Annotated[
        list[str] | None, Parameter(help="Available versions, current first")
    ] = None,
    navigation: typ.Annotated[
        str, Parameter(help="Markup inserted for navigation commands")
    ] = "",
    keep_deferred: typ.Annotated[
        bool, Parameter(help="Keep unresolved links for a later assembly pass")
    ] = False,
    verbose: typ.Annotated[
        int, Parameter(help="0 errors, 1 warnings, 2 info, 3 debug")
    ] = VERBOSITY_WARNINGS,
) -> None:
    """Assemble every partially rendered page below ``output_dir``.

    Parameters
    ----------
    output_dir : Path
        Directory written by a partial render.
    config : Path or None, optional
        Renderer YAML configuration; its ``module_name`` is the default
        project name.
    project_name : str or None, optional
        Name substituted for project-name tokens; overrides ``config``.
    links : str or None, optional
        JSON object mapping reference targets to root-relative paths.
    versions : list[str] or None, optional
        Versions offered by the selector, current first.
    navigation : str, optional
        Markup injected in place of navigation commands.
    keep_deferred : bool, optional
        Leave links the index cannot resolve for a later pass.
    verbose : int, optional
        Logging verbosity.

    Raises
    ------
    SystemExit
        With status ``1`` when the configuration, link index or a manifest is
        invalid, or the output directory is missing.
    """
    setup_logger(verbose)
    try:
        name = project_name
        if name is None:
            name = load_renderer_config(config).module_name if config else "root"
        written = assemble_directory(
            output_dir,
            project_name=name,
            link_index=_parse_links(links),
            versions=versions or (),
            navigation_html=navigation,
            keep_deferred=keep_deferred,
        )
    except (FileNotFoundError, TypeError, ValueError) as exc:
        kind = (
            "manifest"
            if isinstance(exc, ManifestError)
            else "configuration"
            if isinstance(exc, RendererConfigError)
            else "input"
        )
        print(f"error: invalid {kind}: {exc}", file=sys.stderr)
        sys.exit(1)
    for path in written:
        print(f"assembled {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``docset-html`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
