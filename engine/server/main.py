"""
FastAPI server for the beamfield harness.

Exposes presets, board generation, board decoding and random-vs-random
battles over REST.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from beamfield.core.generator import BoardParams, generate_board_from_params
from beamfield.core.notation import NotationError, decode, encode
from beamfield.match.catalog import PRESETS, get_preset, default_preset
from beamfield.match.driver import BattleConfig, Battler
from beamfield.match.producers import RandomProducer, SidedProducer

VERSION = "0.1.0"

# Largest board side and entity count accepted over HTTP
MAX_BOARD_SIDE = 200
MAX_ENTITIES = 1000

logger = logging.getLogger("beamfield.server")


# --- Pydantic Models ---

class EntityModel(BaseModel):
    position: int
    type: str
    id: int


class BoardStateModel(BaseModel):
    width: int
    height: int
    turn: str
    beams: list[EntityModel]
    pawns: list[EntityModel]
    targets: list[EntityModel]
    field: list[str]


class BoardResponse(BaseModel):
    text: str
    state: BoardStateModel


class GenerateBoardRequest(BaseModel):
    preset: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0, le=MAX_BOARD_SIDE)
    height: Optional[int] = Field(default=None, gt=0, le=MAX_BOARD_SIDE)
    beams: Optional[int] = Field(default=None, ge=0, le=MAX_ENTITIES)
    pawns: Optional[int] = Field(default=None, ge=0, le=MAX_ENTITIES)
    targets: Optional[int] = Field(default=None, ge=0, le=MAX_ENTITIES)
    seed: Optional[str] = None


class DecodeBoardRequest(BaseModel):
    text: str


class PresetResponse(BaseModel):
    id: str
    name: str
    default: bool
    width: int
    height: int
    beams: int
    pawns: int
    targets: int


class BattleRequest(BaseModel):
    preset: Optional[str] = None
    seed: Optional[str] = None
    max_turns: int = Field(default=300, ge=0, le=10000)
    agent_seeds: tuple[int, int] = (0, 1)


class FrameModel(BaseModel):
    turns: int
    turn: str
    entity_id: Optional[int]
    entity_type: Optional[str]
    direction: str


class BattleResponse(BaseModel):
    turns: int
    final_turn: str
    initial_board: str
    frames: list[FrameModel]


class HealthResponse(BaseModel):
    status: str
    version: str


# --- Helpers ---

def board_response(state) -> BoardResponse:
    return BoardResponse(text=encode(state), state=BoardStateModel(**state.to_dict()))


def resolve_params(preset_id: Optional[str]) -> BoardParams:
    """Find preset params, mapping unknown ids to 404."""
    if preset_id is None:
        return default_preset().params
    try:
        return get_preset(preset_id).params
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {preset_id}")


# --- App ---

app = FastAPI(title="beamfield", version=VERSION)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", version=VERSION)


@app.get("/presets", response_model=list[PresetResponse])
async def list_presets():
    return [
        PresetResponse(
            id=preset.id,
            name=preset.name,
            default=preset.default,
            width=preset.params.width,
            height=preset.params.height,
            beams=preset.params.beams,
            pawns=preset.params.pawns,
            targets=preset.params.targets,
        )
        for preset in PRESETS
    ]


@app.post("/boards", response_model=BoardResponse)
async def generate(request: GenerateBoardRequest):
    """Generate a board from a preset, overriding any given field."""
    params = resolve_params(request.preset)
    overrides = request.model_dump(exclude={'preset'}, exclude_none=True)
    params = replace(params, **overrides)
    return board_response(generate_board_from_params(params))


@app.post("/boards/decode", response_model=BoardResponse)
async def decode_board(request: DecodeBoardRequest):
    try:
        state = decode(request.text)
    except NotationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return board_response(state)


@app.post("/battles", response_model=BattleResponse)
async def run_random_battle(request: BattleRequest):
    """Run a battle between two random agents."""
    params = resolve_params(request.preset)
    if request.seed is not None:
        params = replace(params, seed=request.seed)

    producer = SidedProducer([RandomProducer(seed) for seed in request.agent_seeds])
    battler = Battler(producer, params, config=BattleConfig(max_turns=request.max_turns), on_frame=lambda frame: None)
    record = await battler.run()
    logger.info("Battle on %s finished after %d turns", request.preset or "default", record.turns)

    return BattleResponse(
        turns=record.turns,
        final_turn=record.final_state.turn,
        initial_board=encode(record.initial_state),
        frames=[
            FrameModel(
                turns=frame.turns,
                turn=frame.turn,
                entity_id=frame.entity.id if frame.entity is not None else None,
                entity_type=frame.entity.type if frame.entity is not None else None,
                direction=frame.direction,
            )
            for frame in record.frames
        ],
    )


# --- Entry Point ---

def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
