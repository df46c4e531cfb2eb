# templink/cli/interface.py
import sys
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click_option_group import optgroup
import structlog

from templink import __version__ as app_version
from templink.config.loader import load_and_merge_configs, build_engine_config
from templink.core import TemplateEngine, ComposedSet, include_graph
from templink.core.helpers import BUILTIN_HELPERS, repeat_helper
from templink.core.output import emit_rendered
from templink.exceptions import TemplinkError
from templink.logging_setup import configure_logging

log = structlog.get_logger(__name__)

# Call-scoped helpers the render command passes on every composition.
RENDER_CALL_HELPERS = {"repeat": repeat_helper}

def _parse_user_vars(raw_vars: Tuple[str, ...]) -> Dict[str, str]:
    user_vars: Dict[str, str] = {}
    for item in raw_vars:
        if "=" not in item:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="--var")
        key, value = item.split("=", 1)
        user_vars[key.strip()] = value
    return user_vars

def _load_data_file(data_file: Optional[Path]) -> Dict[str, Any]:
    if data_file is None:
        return {}
    try:
        data = json.loads(data_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"could not load JSON from '{data_file}': {e}", param_hint="--data")
    if not isinstance(data, dict):
        raise click.BadParameter(f"'{data_file}' must hold a JSON object", param_hint="--data")
    return data

def _build_engine(base_dir: Optional[Path], raw_config: Dict[str, Any]) -> TemplateEngine:
    engine = TemplateEngine(build_engine_config(raw_config))
    if base_dir is not None:
        engine.set_base_dir(base_dir)
    for name, helper in BUILTIN_HELPERS.items():
        engine.add_fixed_func(name, helper)
    effective = engine.config
    log.debug("cli_engine_ready", base_dir=effective.base_dir, cache=effective.cache_enabled, encoding=effective.encoding)
    return engine

def _run_guarded(action):
    try:
        action()
    except click.exceptions.Exit as e: raise e
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except TemplinkError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Template Source", help="Where template files are read from.")
@optgroup.option("-b", "--base-dir", "base_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory template names are resolved against. Overrides config files.")
@optgroup.group("Application Behavior", help="Logging and diagnostics.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="templink", prog_name="templink", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, base_dir: Optional[Path], verbosity_level: int, force_json_logs_cli: bool):
    """templink: compose handlebars templates linked by include/extends
    directives and render them."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs_cli)

    ctx.ensure_object(dict)
    ctx.obj["base_dir"] = base_dir


@main_cli_group.command("render")
@click.argument("root")
@optgroup.group("Template Data", help="Values the template is rendered with.")
@optgroup.option("-d", "--data", "data_file", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), default=None, help="JSON file holding an object used as the template context.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Template variable; overrides --data and config vars.")
@optgroup.group("Output", help="Where the rendered text goes.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to. Default: stdout.")
@click.pass_context
def render_command(ctx: click.Context, root: str, data_file: Optional[Path], user_vars: Tuple[str, ...], output_file: Optional[Path]):
    """Compose ROOT and render it."""
    def action():
        raw_config = load_and_merge_configs()
        engine = _build_engine(ctx.obj.get("base_dir"), raw_config)

        context: Dict[str, Any] = dict(raw_config.get("vars", {}) or {})
        context.update(_load_data_file(data_file))
        context.update(_parse_user_vars(user_vars))

        composed = engine.compose_with_funcs(root, RENDER_CALL_HELPERS)
        rendered = composed.render(context)
        emit_rendered(rendered, root, output_file)
        if output_file:
            click.echo(f"Info: Output written to: {output_file}", err=True)
    _run_guarded(action)


def _format_inspection(composed: ComposedSet) -> str:
    includes = include_graph(composed)
    lines = [f"root: {composed.root}", f"units ({len(composed)}):"]
    for idx, name in enumerate(composed.names, start=1):
        line = f"  {idx}. {name}"
        if name in composed.parents:
            line += f"  extends {composed.parents[name]}"
        lines.append(line)
        for included in includes[name]:
            lines.append(f"       include {included}")
    return "\n".join(lines) + "\n"


@main_cli_group.command("inspect")
@click.argument("root")
@click.pass_context
def inspect_command(ctx: click.Context, root: str):
    """Compose ROOT and list its units in parse order."""
    def action():
        engine = _build_engine(ctx.obj.get("base_dir"), load_and_merge_configs())
        emit_rendered(_format_inspection(engine.compose(root)), root)
    _run_guarded(action)
