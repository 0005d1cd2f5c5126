"""
Command-line interface for the sprite pipeline.
Provides commands for processing pictures, sprite sheets and icons.
"""

import sys
import os
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, List
import typer
from rich.console import Console
from rich.table import Table

from .config import ToolConfig, ENV_PREFIX, parse_color
from .errors import SpritePipelineError
from .pipeline import PicturePipeline, PictureRequest, IconPipeline
from .processing.alignment import resolve_anchor

# Initialize typer app and rich console
app = typer.Typer(
    name="sprite-pipeline",
    help="Sprite pipeline - Turn raw artwork into trimmed sprites, sprite sheets and icon atlases",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]sprite-pipeline picture -t tree.png --alignment bottom-center[/cyan]     Process one picture
  [cyan]sprite-pipeline picture -t tree.png --variants 4 --infer-shadow[/cyan]   Build a sprite sheet with shadow
  [cyan]sprite-pipeline icon gear.png wheel.png[/cyan]                           Build icon atlases
  [cyan]CONFIG=custom.toml sprite-pipeline icon gear.png[/cyan]                  Use custom config

[bold]Environment Variables:[/bold]
  Use [cyan]sprite-pipeline config --env-vars[/cyan] to see all available variables.
    """
)
console = Console()


def _setup_logging(verbose: bool) -> logging.Logger:
    """Set up logging for the pipeline."""
    logger = logging.getLogger("sprite_pipeline")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def _parse_alignment(value: Optional[str]) -> Optional[str]:
    """Validate the alignment option early so typos in numbers fail as usage errors."""
    if value is None:
        return None
    try:
        resolve_anchor(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    return value


@app.command()
def picture(
    textures: List[Path] = typer.Option(..., "--textures", "-t", help="One or more texture files to process"),
    shadow: Optional[Path] = typer.Option(None, "--shadow", "-s", help="A shadow image file to process"),
    infer_shadow: bool = typer.Option(False, "--infer-shadow", help="Use <texture>-shadow<ext> next to the first texture"),
    variants: int = typer.Option(1, "--variants", "-n", min=1, help="The number of variants in a sprite sheet"),
    scale: Optional[float] = typer.Option(None, "--scale", help="Scale factor for resizing images"),
    alignment: Optional[str] = typer.Option(None, "--alignment", "-a", callback=_parse_alignment,
                                            help="Alignment for image placement, e.g. 'bottom-center' or '0.5,1'"),
    frame_map: bool = typer.Option(False, "--frame-map", help="Write a JSON frame map next to a sprite sheet"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging")
):
    """Process pictures (or numbered variants into a sprite sheet) for in-game use."""
    _setup_logging(verbose)

    if variants > 1 and len(textures) != 1:
        console.print("[red]Error:[/red] --textures must contain exactly one value when --variants is greater than 1.")
        raise typer.Exit(1)

    try:
        config = _load_config(config_file)

        request = PictureRequest(
            textures=tuple(textures),
            shadow=shadow,
            infer_shadow=infer_shadow,
            variants=variants,
            scale=config.scale if scale is None else scale,
            alignment=config.alignment if alignment is None else resolve_anchor(alignment),
            write_frame_map=frame_map
        )

        console.print("[bold blue]Processing pictures...[/bold blue]")
        result = PicturePipeline(config).run(request)

        for message in result.report.messages:
            console.print(f"  {message}")

        console.print(f"[green]✓[/green] Saved: {result.output_path}")
        if result.shadow_output_path:
            console.print(f"[green]✓[/green] Saved shadow: {result.shadow_output_path}")
        if result.frame_map_path:
            console.print(f"[green]✓[/green] Saved frame map: {result.frame_map_path}")

    except typer.Exit:
        raise
    except SpritePipelineError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error processing pictures:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def icon(
    textures: List[Path] = typer.Argument(..., help="Base texture files to convert into icon sets"),
    blur: Optional[int] = typer.Option(None, "--blur", min=0, help="Shadow blur radius (also the layer padding)"),
    shadow_color: Optional[str] = typer.Option(None, "--shadow-color", help="Shadow colour as 'r,g,b,a' or '#rrggbbaa'"),
    offset_x: Optional[int] = typer.Option(None, "--offset-x", help="Horizontal shadow offset"),
    offset_y: Optional[int] = typer.Option(None, "--offset-y", help="Vertical shadow offset"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging")
):
    """Build 120x64 multi-resolution icon atlases with a drop shadow."""
    _setup_logging(verbose)

    try:
        config = _load_config(config_file)

        overrides = {}
        if blur is not None:
            overrides['shadow_blur_radius'] = blur
        if shadow_color is not None:
            try:
                overrides['shadow_color'] = parse_color(shadow_color)
            except ValueError as e:
                console.print(f"[red]Invalid --shadow-color:[/red] {e}")
                raise typer.Exit(1)
        if offset_x is not None or offset_y is not None:
            overrides['shadow_offset'] = (
                config.shadow_offset[0] if offset_x is None else offset_x,
                config.shadow_offset[1] if offset_y is None else offset_y
            )
        if overrides:
            config = replace(config, **overrides)

        console.print(f"[bold blue]Building icons for {len(textures)} file(s)...[/bold blue]")
        batch = IconPipeline(config).run(textures)

        for result in batch.results:
            if result.success:
                for message in result.report.messages:
                    console.print(f"  {message}")
                for warning in result.report.warnings:
                    console.print(f"  [yellow]Warning:[/yellow] {warning}")
                console.print(f"[green]✓[/green] Saved: {result.output_path}")
            else:
                console.print(f"[red]✗[/red] {result.texture}: {result.error}")

        if batch.failed:
            console.print(f"[yellow]{len(batch.failed)} of {len(batch.results)} icons failed[/yellow]")
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error building icons:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate_config: bool = typer.Option(False, "--validate", help="Validate configuration file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage pipeline configuration."""
    try:
        if env_vars:
            _display_env_vars()
            return

        if show or validate_config:
            tool_config = _load_config(config_file)

            if show:
                _display_config(tool_config)

            if validate_config:
                errors = tool_config.validate()
                if errors:
                    console.print("[red]Configuration validation errors:[/red]")
                    for error in errors:
                        console.print(f"  • {error}")
                    raise typer.Exit(1)
                else:
                    console.print("[green]✓ Configuration is valid[/green]")
        else:
            console.print("Use --show to display configuration, --validate to check it, or --env-vars to see environment variables.")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error managing configuration:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """Show sprite pipeline version information."""
    from . import __version__

    console.print("[bold]Sprite Pipeline[/bold]")
    console.print(f"Version: {__version__}")
    console.print("Python: " + sys.version.split()[0])

    deps_status = []

    try:
        import PIL
        deps_status.append(("Pillow", PIL.__version__, "✓"))
    except ImportError:
        deps_status.append(("Pillow", "Not installed", "✗"))

    try:
        import numpy
        deps_status.append(("NumPy", numpy.__version__, "✓"))
    except ImportError:
        deps_status.append(("NumPy", "Not installed", "✗"))

    table = Table(title="Dependencies")
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Status")
    for name, dep_version, status in deps_status:
        table.add_row(name, dep_version, status)
    console.print(table)


def _load_config(config_file: Optional[Path]) -> ToolConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config_path = config_file
    if config_path is None and os.getenv("CONFIG"):
        config_path = Path(os.getenv("CONFIG", ""))

    if config_path:
        if not config_path.exists():
            console.print(f"[red]Configuration file not found:[/red] {config_path}")
            raise typer.Exit(1)
        tool_config = ToolConfig.from_file(config_path)
        console.print(f"[dim]Using configuration: {config_path}[/dim]")
    else:
        tool_config = None
        for default_path in [Path("sprite_pipeline.toml"), Path("sprite_pipeline.json")]:
            if default_path.exists():
                console.print(f"[dim]Using configuration: {default_path}[/dim]")
                tool_config = ToolConfig.from_file(default_path)
                break

        if tool_config is None:
            tool_config = ToolConfig()

    # Apply environment variable overrides
    tool_config = ToolConfig._apply_env_overrides(tool_config)

    env_vars_used = [key for key in os.environ if key.startswith(ENV_PREFIX)]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    return tool_config


def _display_config(tool_config: ToolConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="Sprite Pipeline Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Tile Size", str(tool_config.tile_size))
    table.add_row("Scale", str(tool_config.scale))
    table.add_row("Alignment", f"({tool_config.alignment[0]}, {tool_config.alignment[1]})")

    table.add_row("Shadow Blur Radius", str(tool_config.shadow_blur_radius))
    table.add_row("Shadow Offset", f"({tool_config.shadow_offset[0]}, {tool_config.shadow_offset[1]})")
    table.add_row("Shadow Color", ",".join(str(c) for c in tool_config.shadow_color))
    table.add_row("Square Tolerance", f"{tool_config.square_tolerance}px")

    table.add_row("Output Suffix", tool_config.output_suffix)
    table.add_row("Output Format", tool_config.output_format)
    table.add_row("Compression Level", str(tool_config.compression_level))

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="Sprite Pipeline Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="green")

    env_vars = [
        ("TILE_SIZE", "Reference tile size and picture target size", "64"),
        ("SCALE", "Default scale factor", "1.0"),
        ("ALIGNMENT", "Default alignment", "bottom-center"),
        ("SHADOW_BLUR_RADIUS", "Icon shadow blur radius", "2"),
        ("SHADOW_OFFSET", "Icon shadow offset as x,y", "0,0"),
        ("SHADOW_COLOR", "Icon shadow colour as r,g,b,a", "0,0,0,116"),
        ("SQUARE_TOLERANCE", "Allowed non-squareness of icon sources in pixels", "10"),
        ("OUTPUT_SUFFIX", "Suffix added to output file names", "-processed"),
        ("OUTPUT_FORMAT", "Output image format", "PNG"),
        ("COMPRESSION_LEVEL", "PNG compression level (0-9)", "6"),
    ]

    for var_name, description, example in env_vars:
        table.add_row(ENV_PREFIX + var_name, description, example)

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")
    console.print(f"[dim]Example: export {ENV_PREFIX}SHADOW_BLUR_RADIUS=3[/dim]")


if __name__ == "__main__":
    app()
