from fastapi import FastAPI, APIRouter, Depends, HTTPException, Body

from typing import Optional
import logging

from planner.infra.Storage import JsonFileStorage
from planner.logic.agenda.day_view import build_day_view
from planner.logic.agenda.state import PlannerState, build_state
from planner.logic.dates.date_keys import current_date, parse_key
from planner.utilities.backup import BackupManager
from planner.utilities.constants import NAMESPACES
from planner.utilities.validators import FieldUpdateInput, DefaultUpdateInput, ThemeInput

# Logging
logger = logging.getLogger("planner_app")

# Initialize FastAPI app
app = FastAPI(title="Student Planner API")
router = APIRouter(prefix="/api")


def get_state() -> PlannerState:
    """Process-wide planner state, hydrated on first use."""
    state = getattr(app.state, "planner", None)
    if state is None:
        state = build_state()
        app.state.planner = state
    return state


@app.on_event("startup")
def _startup_load_state():
    get_state()
    logger.info("Planner data loaded")


def _parse_day(date_key: str):
    try:
        return parse_key(date_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------- Days --------------------
@router.get("/today")
def api_today(state: PlannerState = Depends(get_state)):
    return build_day_view(state, current_date())


@router.get("/days/{date_key}")
def api_day(date_key: str, state: PlannerState = Depends(get_state)):
    return build_day_view(state, _parse_day(date_key))


@router.put("/days/{date_key}/periods/{period}")
def api_update_period(date_key: str, period: int, payload: FieldUpdateInput,
                      state: PlannerState = Depends(get_state)):
    day = _parse_day(date_key)
    try:
        state.set_field(date_key, period, payload.field, payload.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.debug("Updated %s period %s %s", date_key, period, payload.field)
    return build_day_view(state, day)


# -------------------- Default schedule --------------------
@router.get("/defaults")
def api_defaults(state: PlannerState = Depends(get_state)):
    return {"defaults": state.defaults.as_list()}


@router.put("/defaults/{period}")
def api_update_default(period: int, payload: DefaultUpdateInput,
                       state: PlannerState = Depends(get_state)):
    try:
        state.set_default(period, payload.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"defaults": state.defaults.as_list()}


# -------------------- Theme --------------------
@router.get("/theme")
def api_theme(state: PlannerState = Depends(get_state)):
    return {"theme": state.theme.value}


@router.put("/theme")
def api_set_theme(payload: ThemeInput, state: PlannerState = Depends(get_state)):
    return {"theme": state.set_theme(payload.theme)}


@router.post("/theme/toggle")
def api_toggle_theme(state: PlannerState = Depends(get_state)):
    return {"theme": state.toggle_theme()}


# -------------------- Backups --------------------
def _backup_manager(state: PlannerState) -> BackupManager:
    storage = state.repository.storage
    if not isinstance(storage, JsonFileStorage):
        raise HTTPException(status_code=400, detail="Backups are only available for file storage")
    return BackupManager(storage.data_dir)


@router.get("/backups")
def api_list_backups(namespace: Optional[str] = None, state: PlannerState = Depends(get_state)):
    manager = _backup_manager(state)
    filename = f"{namespace}.json" if namespace else None
    return {"backups": manager.list_backups(filename)}


@router.post("/backups")
def api_create_backups(state: PlannerState = Depends(get_state)):
    manager = _backup_manager(state)
    results = manager.backup_all([f"{ns}.json" for ns in NAMESPACES])
    logger.info("Backup request: %s", results)
    return {"results": results}


@router.post("/backups/restore")
def api_restore_backup(name: str = Body(..., embed=True), state: PlannerState = Depends(get_state)):
    manager = _backup_manager(state)
    if not manager.restore_backup(name):
        raise HTTPException(status_code=404, detail="Backup not found")
    state.reload()
    return {"success": True}


app.include_router(router)
