"""Shared Typer app object, shared option types, and store utilities."""

from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from ..core.catalog import PlanCatalog
from ..core.models import AppState
from ..core.settings import load_settings
from ..io.serializers import ValidationError, validate_mode
from ..io.state_store import DataDir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--data-dir",
        "-p",
        help="Directory holding state.json / plans.json (default: $TRAINING_OS_HOME or ~/.training-os)",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="training-os",
    help="Daily workout planner: rotating A-D days, intensity modes, soreness-aware.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_data(data_dir: Path | None) -> DataDir:
    """Get the stores rooted at data_dir or the default location."""
    return DataDir(data_dir)


def get_catalog(data: DataDir) -> PlanCatalog:
    """Plan catalog backed by the user-plan store in data."""
    return PlanCatalog(data.plans)


def get_settings(data: DataDir) -> dict[str, Any]:
    """User settings from data.root/settings.yaml merged over defaults."""
    return load_settings(data.root)


def resolve_mode(mode: str | None, data: DataDir) -> str:
    """
    Normalise a --mode value, falling back to the configured default.

    Exits with an error message if the value is not a known mode.
    """
    if mode is None:
        return get_settings(data)["default_mode"]
    try:
        return validate_mode(mode)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def load_state(data: DataDir) -> AppState:
    """
    Load the persisted state.

    A fresh data directory starts on the configured default plan.
    """
    if not data.state.exists():
        return AppState(active_plan_id=get_settings(data)["default_plan_id"])
    return data.state.load()
