from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from pyeditor.core.autocomplete import get_compatible_api
from pyeditor.core.boards import get_board_capability, list_boards
from pyeditor.core.config_manager import EditorConfig
from pyeditor.metrics.sinks import MetricsSink
from pyeditor.metrics.tracker import FileListing, MetricsTracker, ScriptBuffer
from pyeditor.utils.code_analyzer import detect_imports, find_incompatible_imports
from pyeditor.utils.exceptions import UnrecognizedBoardError


# Request / response models
class CodeRequest(BaseModel):
    code: str


class CompatibilityRequest(BaseModel):
    board_id: str
    code: str


class CompatibilityResponse(BaseModel):
    board_id: str
    compatible: bool
    unavailable: List[str] = []


class ActionRequest(BaseModel):
    element_id: Optional[str] = None
    code: Optional[str] = None
    files: Optional[List[str]] = None
    storage_used: Optional[int] = None


def create_app(
        config: EditorConfig,
        sink: Optional[MetricsSink] = None,
        default_script: str = "",
) -> FastAPI:
    """Create the editor support API."""
    app = FastAPI(title="Python Editor Support", version=config.editor_version)

    editor = ScriptBuffer(default_script)
    filesystem = FileListing()
    tracker = MetricsTracker(config, editor, filesystem, sink)
    tracker.capture_default_script()
    app.state.tracker = tracker

    @app.get("/api/boards")
    async def get_boards():
        return list_boards()

    @app.get("/api/autocomplete/{board_id}")
    async def get_autocomplete(board_id: str) -> Dict[str, Any]:
        """Autocomplete words for a board, validating the board ID."""
        try:
            capability = get_board_capability(board_id)
        except UnrecognizedBoardError as e:
            raise HTTPException(status_code=404, detail=str(e))
        words = get_compatible_api(board_id)
        return {"board_id": board_id, "capability": capability.value, "words": words}

    @app.post("/api/imports")
    async def post_imports(request: CodeRequest) -> Dict[str, Any]:
        return detect_imports(request.code).to_dict()

    @app.post("/api/compatibility", response_model=CompatibilityResponse)
    async def post_compatibility(request: CompatibilityRequest):
        try:
            unavailable = find_incompatible_imports(request.board_id, request.code)
        except UnrecognizedBoardError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return CompatibilityResponse(
            board_id=request.board_id,
            compatible=not unavailable,
            unavailable=unavailable,
        )

    @app.post("/api/metrics/action")
    async def post_action(request: ActionRequest):
        """Report a button click, with the editor state it applies to."""
        if request.code is not None:
            editor.set_code(request.code)
        if request.files is not None:
            filesystem.files = list(request.files)
        if request.storage_used is not None:
            filesystem.storage_used = request.storage_used
        events = tracker.track_action(request.element_id)
        return {"sent": [{"action": e.action, "label": e.label, "value": e.value} for e in events]}

    return app
