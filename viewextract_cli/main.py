import typer
from pathlib import Path
from typing import Optional

import yaml

from viewextract.config import configure_logging
from viewextract.exceptions import TreeFormatError, UnknownNativeType
from viewextract.geometry import Rect
from viewextract.locator import ViewLocator
from viewextract.native import NativeView, describe_path, registry, view_from_dict, walk


# Create the main Typer application object
app = typer.Typer(
    name="viewextract",
    help="Inspect native view trees and try out view searches.",
    add_completion=False
)


def load_tree(tree_file: Path) -> NativeView:
    """Reads a YAML (or JSON) native tree description."""
    if not tree_file.exists():
        print(f"❌ Error: Tree file not found at '{tree_file}'")
        raise typer.Exit(code=2)
    try:
        with tree_file.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        return view_from_dict(data)
    except yaml.YAMLError as e:
        print(f"❌ Error: Could not parse '{tree_file}': {e}")
        raise typer.Exit(code=2)
    except TreeFormatError as e:
        print(f"❌ Error: Invalid tree in '{tree_file}': {e.message}")
        raise typer.Exit(code=2)


# --- CLI Commands ---

@app.command()
def locate(
    tree_file: Path = typer.Argument(..., help="YAML or JSON file describing the native tree."),
    type_tag: str = typer.Option(..., "--type", "-t", help="Native type tag to search for, e.g. ScrollView."),
    region: str = typer.Option(..., "--region", "-r", help="Target region in window space: x,y,width,height."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides the configured log level."),
):
    """
    Finds the first view of TYPE whose window frame intersects REGION.
    """
    configure_logging(log_level)
    root = load_tree(tree_file)
    try:
        target_region = Rect.parse(region)
    except ValueError as e:
        print(f"❌ Error: {e}")
        raise typer.Exit(code=2)

    try:
        match = ViewLocator().locate(root, type_tag, target_region)
    except UnknownNativeType as e:
        print(f"❌ Error: {e.message}")
        print(f"   Known types: {', '.join(registry.tags())}")
        raise typer.Exit(code=2)

    if match is None:
        print(f"No {type_tag} intersects {target_region}")
        raise typer.Exit(code=1)
    print(f"✅ {describe_path(match)}")
    print(f"   window frame: {match.window_frame()}")


@app.command()
def dump(
    tree_file: Path = typer.Argument(..., help="YAML or JSON file describing the native tree."),
):
    """
    Prints the tree with each view's frame resolved to window space.
    """
    root = load_tree(tree_file)
    for depth, view in walk(root):
        label = f" {view.name!r}" if view.name else ""
        print(f"{'  ' * depth}{view.type_tag}{label} {view.window_frame()}")


if __name__ == "__main__":
    app()
