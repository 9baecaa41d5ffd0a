"""
Main CLI application for fossy-upload.

Defines the Typer application structure and command routing,
keeping the CLI layer thin.
"""
import typer

from fossy_upload.cli.commands.upload import upload_command


# Initialize Typer app
app = typer.Typer(
    help="fossy-upload - upload artifacts to Fossology and trigger scans",
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Register commands
app.command("upload", help="Upload a file or a Git repository and trigger its scan.")(upload_command)


@app.callback()
def main():
    """fossy-upload - Fossology REST upload helper.

    Run 'fossy-upload upload --help' for the upload options.
    """
