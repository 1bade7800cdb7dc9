"""Plan commands: plans, use-plan, upload-plan, export-plan, remove-plan."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, JsonOption, app, get_catalog, get_data, load_state


@app.command()
def plans(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    List built-in and uploaded plans.

    The active plan is marked with ▶.
    """
    data = get_data(data_dir)
    state = load_state(data)
    catalog = get_catalog(data)
    all_plans = catalog.list_all()
    active = catalog.find(state.active_plan_id)

    if json_out:
        out = [
            {
                "id": p.id,
                "name": p.name,
                "kind": p.kind,
                "dayKeys": list(p.day_keys),
                "builtin": catalog.is_builtin(p.id),
                "active": p.id == active.id,
            }
            for p in all_plans
        ]
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return

    builtin_ids = {p.id for p in catalog.builtins}
    views.console.print(views.format_plans_table(all_plans, active.id, builtin_ids))


@app.command("use-plan")
def use_plan(
    plan_id: Annotated[str, typer.Argument(help="Plan id (see `training-os plans`)")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Make a plan the active one.

    Any manual day choice is cleared since it belonged to the previous plan.
    """
    data = get_data(data_dir)
    catalog = get_catalog(data)
    plan = next((p for p in catalog.list_all() if p.id == plan_id), None)
    if plan is None:
        views.print_error(f"Unknown plan: {plan_id}. Run `training-os plans` to list them")
        raise typer.Exit(1)

    state = load_state(data)
    data.state.save(state.with_changes(active_plan_id=plan.id, day_override=None))
    views.print_success(f"Active plan: {plan.name} ({plan.id})")


@app.command("upload-plan")
def upload_plan(
    file: Annotated[Path, typer.Argument(help="Plan JSON file")],
    data_dir: DataDirOption = None,
    use: Annotated[
        bool,
        typer.Option("--use", "-u", help="Make the uploaded plan active"),
    ] = False,
) -> None:
    """
    Upload a custom plan from a JSON file.

    A plan with the id of an existing user plan replaces it; one with a
    built-in id overrides that built-in.  Invalid plans are rejected and
    nothing is saved.
    """
    try:
        raw = json.loads(file.read_text(encoding="utf-8"))
    except OSError as e:
        views.print_error(f"Cannot read {file}: {e}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        views.print_error(f"{file} is not valid JSON: {e}")
        raise typer.Exit(1)

    data = get_data(data_dir)
    catalog = get_catalog(data)
    try:
        plan = catalog.upload(raw)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if catalog.is_builtin(plan.id):
        views.print_warning(f"'{plan.id}' overrides the built-in plan with the same id.")
    views.print_success(f"Uploaded plan: {plan.name} ({plan.id}, {len(plan.day_keys)} days)")

    if use:
        state = load_state(data)
        data.state.save(state.with_changes(active_plan_id=plan.id, day_override=None))
        views.print_success(f"Active plan: {plan.name}")


@app.command("export-plan")
def export_plan(
    plan_id: Annotated[
        Optional[str],
        typer.Argument(help="Plan id (default: the active plan)"),
    ] = None,
    data_dir: DataDirOption = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """
    Print a plan in upload format.

    The output can be edited and uploaded again with upload-plan.
    """
    data = get_data(data_dir)
    catalog = get_catalog(data)
    if plan_id is None:
        plan = catalog.find(load_state(data).active_plan_id)
    else:
        plan = next((p for p in catalog.list_all() if p.id == plan_id), None)
        if plan is None:
            views.print_error(f"Unknown plan: {plan_id}")
            raise typer.Exit(1)

    text = catalog.export_plan_json(plan)
    if out is None:
        print(text)
        return

    try:
        out.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        views.print_error(f"Cannot write {out}: {e}")
        raise typer.Exit(1)
    views.print_success(f"Exported {plan.id} to {out}")


@app.command("remove-plan")
def remove_plan(
    plan_id: Annotated[str, typer.Argument(help="Id of an uploaded plan")],
    data_dir: DataDirOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Remove without prompting"),
    ] = False,
) -> None:
    """
    Delete an uploaded plan.

    Built-in plans cannot be removed; removing a user override of a built-in
    brings the built-in back.
    """
    data = get_data(data_dir)
    catalog = get_catalog(data)

    if not any(p.id == plan_id for p in catalog.user_plans()):
        if catalog.is_builtin(plan_id):
            views.print_error(f"'{plan_id}' is a built-in plan and cannot be removed")
        else:
            views.print_error(f"No uploaded plan with id '{plan_id}'")
        raise typer.Exit(1)

    if not force and not views.confirm_action(f"Remove plan '{plan_id}'?"):
        views.print_info("Cancelled.")
        return

    catalog.remove(plan_id)
    views.print_success(f"Removed plan {plan_id}")

    state = load_state(data)
    if state.active_plan_id == plan_id and not catalog.is_builtin(plan_id):
        fallback = catalog.find(None)
        data.state.save(state.with_changes(active_plan_id=fallback.id, day_override=None))
        views.print_info(f"Active plan switched to {fallback.name}")
