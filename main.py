"""Main application entry point for the Call Center Dashboard"""

import json
import sys
from pathlib import Path

import click

from config.settings import settings
from core import get_logger, setup_logging
from forms import apply_submit_attempt, build_schema, hidden_field_names, initialize
from frontend.admin_forms import FORMS


logger = get_logger(__name__)


# CLI Commands
@click.group()
@click.option('--log-level', default=None, help='Override the configured log level')
def cli(log_level):
    """Call Center Dashboard CLI"""
    options = settings.get_logging_settings()
    if log_level:
        options["log_level"] = log_level
    setup_logging(**options)


@cli.command()
def dashboard():
    """Start the Streamlit dashboard"""
    import streamlit.web.cli as stcli

    script = Path(__file__).resolve().parent / "frontend" / "dashboard.py"
    sys.argv = ["streamlit", "run", str(script)]
    sys.exit(stcli.main())


@cli.command()
def forms():
    """List the built-in form schemas"""
    for key, (title, build_fields) in FORMS.items():
        click.echo(f"{key}: {title}")
        for field in build_fields():
            flags = []
            if field.required:
                flags.append("required")
            if field.show_when is not None:
                flags.append("conditional")
            suffix = f" ({', '.join(flags)})" if flags else ""
            click.echo(f"  - {field.name} [{field.kind.value}]{suffix}")


@cli.command()
@click.argument('form', type=click.Choice(sorted(FORMS)))
@click.argument('values_file', type=click.File('r'))
def validate(form, values_file):
    """Validate a JSON object of values against a built-in form"""
    try:
        values = json.load(values_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON: {e}")
    if not isinstance(values, dict):
        raise click.ClickException("Values file must contain a JSON object")

    _, build_fields = FORMS[form]
    fields = build_schema(build_fields())
    state, result = apply_submit_attempt(initialize(fields, values), fields)

    if result.valid:
        hidden = hidden_field_names(fields, state.values)
        submitted = {name: value for name, value in state.values.items() if name not in hidden}
        click.echo(json.dumps(submitted, indent=2, default=str))
        return

    for name, error in result.errors.items():
        click.echo(f"{name}: {error}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
