from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from petdoku.common.constants import PETS


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    service = getattr(app.state, "service", None)
    if service is not None:
        await service.clock.stop()


app = FastAPI(lifespan=lifespan)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


async def _read_json(request: Request, allow_empty: bool = False):
    if allow_empty and not (await request.body()).strip():
        return {}, None
    try:
        body = await request.json()
    except Exception as e:
        return None, _bad_request(f"Invalid JSON: {str(e)}")
    if not isinstance(body, dict):
        return None, _bad_request("Request body must be a JSON object")
    return body, None


@app.get("/health")
async def health(request: Request) -> Response:
    """Health check."""
    return Response(status_code=200)


@app.get("/state")
async def state(request: Request):
    """Current board, selection, timer and win flag."""
    snapshot = await request.app.state.service.state()
    snapshot["pets"] = {str(v): {"name": name, "icon": icon} for v, (name, icon) in PETS.items()}
    return JSONResponse(content=snapshot)


@app.post("/select")
async def select(request: Request):
    body, error = await _read_json(request)
    if error is not None:
        return error
    symbol = body.get("symbol")
    if not _is_int(symbol) or symbol not in PETS:
        return _bad_request("symbol must be an integer in [1, 9]")
    selected = await request.app.state.service.select_symbol(symbol)
    return JSONResponse(
        content={"selected": selected, "state": await request.app.state.service.state()}
    )


@app.post("/cell")
async def cell(request: Request):
    body, error = await _read_json(request)
    if error is not None:
        return error
    row, col = body.get("row"), body.get("col")
    if not (_is_int(row) and _is_int(col) and 0 <= row < 9 and 0 <= col < 9):
        return _bad_request("row and col must be integers in [0, 8]")
    result = await request.app.state.service.interact_cell(row, col)
    return JSONResponse(
        content={"result": result.value, "state": await request.app.state.service.state()}
    )


@app.post("/new_game")
async def new_game(request: Request):
    body, error = await _read_json(request, allow_empty=True)
    if error is not None:
        return error
    fill_percentage = body.get("fill_percentage")
    if fill_percentage is not None and not (
        _is_int(fill_percentage) and 0 <= fill_percentage <= 100
    ):
        return _bad_request("fill_percentage must be an integer in [0, 100]")
    snapshot = await request.app.state.service.start_new_game(fill_percentage)
    return JSONResponse(content=snapshot)


async def serve_http(app: FastAPI, host: str, port: int) -> None:
    config = uvicorn.Config(app, host=host, port=port)
    server = uvicorn.Server(config)
    await server.serve()


async def run_app(service, listen_address: str, port: int) -> None:
    app.state.service = service
    await serve_http(app, listen_address, port)
