"""CLI entrypoint: Typer app definition and command registration"""

import typer

from folio.cli.commands import (
    backups_cmd, diff_cmd, export_backup_cmd, export_cmd, main_callback, put_cmd,
    restore_cmd, serve_cmd, show_cmd, validate_cmd, validate_field_cmd,
)


app = typer.Typer(name="folio", no_args_is_help=True, help="Portfolio content store with validated writes and backups")

app.callback()(main_callback)
app.command(name="show")(show_cmd)
app.command(name="put")(put_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="validate-field")(validate_field_cmd)
app.command(name="backups")(backups_cmd)
app.command(name="export")(export_cmd)
app.command(name="export-backup")(export_backup_cmd)
app.command(name="restore")(restore_cmd)
app.command(name="diff")(diff_cmd)
app.command(name="serve")(serve_cmd)
