"""
Baofeng Image Flasher CLI

Interactive front end for reading and writing radio memory images through
chirpc, including programming a batch of radios one after another.
"""

import sys
import logging
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.logging import RichHandler

from baofeng_image_flasher.config import DEFAULT_CONFIG_FILE, load_config
from baofeng_image_flasher.devices import discover_usb_ports, list_ports
from baofeng_image_flasher.errors import (
    FlasherError,
    PromptUnavailableError,
    TransferError,
)
from baofeng_image_flasher.models import get_model, list_models
from baofeng_image_flasher.prompts import Prompter
from baofeng_image_flasher.core.runner import ProcessRunner
from baofeng_image_flasher.core.transfer import download, upload
from baofeng_image_flasher.core.sequence import UploadSequence
from baofeng_image_flasher.core.session import (
    Action,
    SessionPlan,
    gather_session,
    require_input_image,
    require_output_file,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = logging.getLogger("baofeng_image_flasher")

# Setup Rich console
console = Console(soft_wrap=True)

app = typer.Typer(help="📻 Baofeng Image Flasher - Program radios through chirpc")


def print_header(text: str) -> None:
    """Print fancy header."""
    console.print(Panel(text, expand=False, style="bold blue"))


def print_success(text: str) -> None:
    """Print success message."""
    console.print(f"✓ {text}", style="green", markup=False, highlight=False)


def print_warning(text: str) -> None:
    """Print warning message."""
    console.print(f"⚠️  {text}", style="yellow", markup=False, highlight=False)


def print_error(text: str) -> None:
    """Print error message."""
    console.print(f"❌ {text}", style="red", markup=False, highlight=False)


def make_prompter() -> Prompter:
    return Prompter(console=console)


@contextmanager
def reporting_errors():
    """Report any FlasherError to the operator and exit with status 1."""
    try:
        yield
    except PromptUnavailableError as exc:
        print_error(f"Error: {exc}")
        console.print("Run this command from an interactive terminal.")
        sys.exit(1)
    except FlasherError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


def _config_path(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    return obj.get("config_path", Path(DEFAULT_CONFIG_FILE))


def _resolve_model(model: str) -> str:
    """Map a model name or id to its chirpc driver id."""
    radio = get_model(model)
    if radio is None:
        print_warning(f"Model '{model}' is not in the registry; passing it to chirpc as-is.")
        return model
    return radio.id


def run_download(runner: ProcessRunner, port: str, model: str, output_path: Path) -> None:
    try:
        download(runner, port, model, output_path)
    except TransferError as exc:
        print_error(f"Error downloading image. {exc}")
        sys.exit(1)
    print_success(f"Download complete. Image saved to: {output_path}")


def run_upload(runner: ProcessRunner, port: str, model: str, input_path: Path) -> None:
    require_input_image(input_path)
    console.print(f"Image loaded from: {input_path}", markup=False, highlight=False)
    try:
        upload(runner, port, model, input_path)
    except TransferError as exc:
        print_error(f"Error uploading image. {exc}")
        sys.exit(1)
    print_success("Image uploaded successfully.")


def run_sequence(
    runner: ProcessRunner,
    port: str,
    model: str,
    input_path: Path,
    prompter,
) -> None:
    require_input_image(input_path)
    console.print(f"Image loaded from: {input_path}", markup=False, highlight=False)

    sequence = UploadSequence(
        runner,
        port,
        model,
        input_path,
        prompter,
        on_uploaded=lambda count: print_success(f"Radio #{count} programmed."),
    )
    result = sequence.run()

    if not result.ok:
        print_error(f"Error uploading image. {result.error}")
        console.print(f"Radios programmed before the failure: {result.uploads}", highlight=False)
        sys.exit(1)

    console.print(f"Radios programmed: {result.uploads}", highlight=False)
    print_success("Done.")


def execute_plan(plan: SessionPlan, runner: ProcessRunner, prompter) -> None:
    """Carry out the action chosen during the interactive session."""
    if not plan.should_transfer:
        print_warning("Download cancelled.")
        return

    if plan.action is Action.DOWNLOAD:
        run_download(runner, plan.port, plan.model, plan.image_path)
    elif plan.action is Action.UPLOAD:
        run_upload(runner, plan.port, plan.model, plan.image_path)
    else:
        run_sequence(runner, plan.port, plan.model, plan.image_path, prompter)


def interactive_session(config_path: Path) -> None:
    """Prompt for port, model and action, then run it."""
    print_header("Baofeng Image Flasher")

    with reporting_errors():
        config = load_config(config_path)
        ports = discover_usb_ports()
        prompter = make_prompter()
        plan = gather_session(prompter, config, ports)
        runner = ProcessRunner(config.chirpc_path, console=console)
        execute_plan(plan, runner, prompter)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Path to config.json"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Read and write Baofeng memory images with chirpc.

    Run without a command for the interactive session.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = {"config_path": config}

    if ctx.invoked_subcommand is None:
        interactive_session(config)


@app.command()
def ports(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include non-USB ports"),
) -> None:
    """List serial ports available for programming."""
    print_header("Available Serial Ports")

    with reporting_errors():
        ports_list = list_ports() if show_all else discover_usb_ports()

    if not ports_list:
        print_warning("No serial ports found")
        return

    table = Table(title="Serial Ports")
    table.add_column("Port", style="cyan")
    table.add_column("Manufacturer", style="magenta")
    table.add_column("Product ID", style="green")

    for port in ports_list:
        table.add_row(port.device, port.manufacturer or "-", port.product_id or "-")

    console.print(table)


@app.command("list-models")
def list_models_cmd() -> None:
    """List supported radio models."""
    print_header("Supported Radio Models")

    table = Table(title="Radio Models")
    table.add_column("Driver ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Notes", style="dim")

    for model in list_models():
        table.add_row(model.id, model.name, model.notes or "-")

    console.print(table)


@app.command("list-images")
def list_images_cmd(ctx: typer.Context) -> None:
    """List image files in the configured images directory."""
    print_header("Memory Images")

    with reporting_errors():
        config = load_config(_config_path(ctx))
    images = config.list_images()

    if not images:
        print_warning(f"No {config.image_suffix} files found in {config.images_path}")
        return

    table = Table(title=str(config.images_path))
    table.add_column("Image", style="cyan")
    table.add_column("Size", style="green", justify="right")

    for name in images:
        size = config.image_path(name).stat().st_size
        table.add_row(name, f"{size:,} bytes")

    console.print(table)


def _confirm_overwrite(output_path: Path, force: bool) -> bool:
    if force or not output_path.exists():
        return True
    prompter = make_prompter()
    if not prompter.interactive:
        print_error(f"{output_path} already exists. Use --force to overwrite.")
        sys.exit(1)
    return prompter.confirm("A file with this name exists, overwrite?", default=False)


@app.command("download")
def download_cmd(
    ctx: typer.Context,
    port: str = typer.Option(..., "--port", "-p", help="Serial port (e.g., /dev/ttyUSB0)"),
    model: str = typer.Option(..., "--model", "-m", help="Radio model (e.g., Baofeng_UV-5R)"),
    out: str = typer.Option(..., "--out", "-o", help="Output image, relative to the images directory"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Download a memory image from the radio."""
    print_header("Download Image from Radio")

    with reporting_errors():
        config = load_config(_config_path(ctx))
        model_id = _resolve_model(model)
        output_path = require_output_file(config.image_path(out.strip()))

        if not _confirm_overwrite(output_path, force):
            print_warning("Download cancelled.")
            return

        runner = ProcessRunner(config.chirpc_path, console=console)
        run_download(runner, port, model_id, output_path)


@app.command("upload")
def upload_cmd(
    ctx: typer.Context,
    port: str = typer.Option(..., "--port", "-p", help="Serial port (e.g., /dev/ttyUSB0)"),
    model: str = typer.Option(..., "--model", "-m", help="Radio model (e.g., Baofeng_UV-5R)"),
    image: str = typer.Option(..., "--in", "-i", help="Input image, relative to the images directory"),
) -> None:
    """Upload a memory image to the radio."""
    print_header("Upload Image to Radio")

    with reporting_errors():
        config = load_config(_config_path(ctx))
        model_id = _resolve_model(model)
        runner = ProcessRunner(config.chirpc_path, console=console)
        run_upload(runner, port, model_id, config.image_path(image))


@app.command("upload-many")
def upload_many_cmd(
    ctx: typer.Context,
    port: str = typer.Option(..., "--port", "-p", help="Serial port (e.g., /dev/ttyUSB0)"),
    model: str = typer.Option(..., "--model", "-m", help="Radio model (e.g., Baofeng_UV-5R)"),
    image: str = typer.Option(..., "--in", "-i", help="Input image, relative to the images directory"),
) -> None:
    """Upload one image to several radios, one after another."""
    print_header("Upload Image to Multiple Radios")

    with reporting_errors():
        config = load_config(_config_path(ctx))
        model_id = _resolve_model(model)
        runner = ProcessRunner(config.chirpc_path, console=console)
        run_sequence(runner, port, model_id, config.image_path(image), make_prompter())


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"\n[red bold]Fatal error:[/red bold] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
