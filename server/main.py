"""
FastAPI server for the Tafl rules engine.

Provides a REST API a browser board can drive: create a game, ask for a
piece's destinations, play moves and reset. Games live in memory only.
"""

from __future__ import annotations
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from tafl import __version__
from tafl.config import RulesConfig, parse_side
from tafl.core.bitboard import algebraic_to_sq, sq_to_algebraic
from tafl.core.errors import IllegalMove, InvariantViolation, OutOfBounds
from tafl.core.moves import decode_move, move_to_algebraic
from tafl.core.notation import format_board
from tafl.engine import Engine

logger = logging.getLogger(__name__)


# --- Pydantic Models ---

class CreateGameRequest(BaseModel):
    enforce_turns: Optional[bool] = None
    first_side: Optional[str] = None


class CreateGameResponse(BaseModel):
    game_id: str


class GameStateResponse(BaseModel):
    game_id: str
    board: list[list[int]]  # [row][col]: 0 empty, 1 attacker, 2 defender, 3 king
    diagram: str
    current_side: str
    status: str
    outcome: str
    winner: Optional[str]
    ply: int


class MakeMoveRequest(BaseModel):
    src: str  # e.g. "d11"
    dst: str  # e.g. "d9"


class MoveResponse(BaseModel):
    move: str
    captured: list[str]
    outcome: str
    game_state: GameStateResponse


class SelectionResponse(BaseModel):
    origin: str
    destinations: list[str]


class LegalMove(BaseModel):
    move: int
    algebraic: str
    src: str
    dst: str


class LegalMovesResponse(BaseModel):
    moves: list[LegalMove]


class HealthResponse(BaseModel):
    status: str
    version: str


# --- Game Storage ---

class Game:
    """Represents an active game session."""

    def __init__(self, game_id: str, config: RulesConfig):
        self.game_id = game_id
        self.engine = Engine(config)

    def status(self) -> str:
        if self.engine.aborted:
            return "aborted"
        return "finished" if self.engine.state.is_terminal() else "playing"

    def to_response(self) -> GameStateResponse:
        """Convert to API response."""
        state = self.engine.state
        winner = state.get_winner()
        return GameStateResponse(
            game_id=self.game_id,
            board=state.board.to_array().tolist(),
            diagram=format_board(state.board),
            current_side=state.current_side.name.lower(),
            status=self.status(),
            outcome=state.outcome.value,
            winner=winner.name.lower() if winner else None,
            ply=state.ply,
        )


# In-memory game storage
games: dict[str, Game] = {}


def get_game_or_404(game_id: str) -> Game:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="Game not found")
    return games[game_id]


def parse_square(name: str) -> int:
    try:
        return algebraic_to_sq(name)
    except OutOfBounds:
        raise HTTPException(status_code=400, detail=f"Invalid square: {name}")


# --- App Setup ---

app = FastAPI(
    title="Tafl Engine",
    description="Rules engine API for 11x11 Tafl",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- REST Endpoints ---

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.post("/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest = None):
    """Create a new game."""
    if request is None:
        request = CreateGameRequest()

    try:
        first_side = parse_side(request.first_side) if request.first_side else None
        config = RulesConfig.from_env(enforce_turns=request.enforce_turns, first_side=first_side)
        game_id = str(uuid.uuid4())[:8]
        game = Game(game_id, config)
    except (ValueError, OSError, InvariantViolation) as e:
        logger.warning("Could not create game: %s", e)
        raise HTTPException(status_code=400, detail=f"Invalid game setup: {e}")

    games[game_id] = game
    logger.info("Created game %s", game_id)
    return CreateGameResponse(game_id=game_id)


@app.get("/games/{game_id}", response_model=GameStateResponse)
async def get_game(game_id: str):
    """Get current game state."""
    return get_game_or_404(game_id).to_response()


@app.get("/games/{game_id}/legal-moves", response_model=SelectionResponse)
async def get_legal_moves_endpoint(game_id: str, square: str):
    """Get the destinations for the piece on one square."""
    game = get_game_or_404(game_id)
    selection = game.engine.select(parse_square(square))
    return SelectionResponse(
        origin=sq_to_algebraic(selection.origin),
        destinations=[sq_to_algebraic(sq) for sq in selection.destinations],
    )


@app.get("/games/{game_id}/moves", response_model=LegalMovesResponse)
async def get_all_moves_endpoint(game_id: str):
    """Get every legal move for the side to move."""
    game = get_game_or_404(game_id)
    result = []
    for m in game.engine.all_moves():
        src, dst = decode_move(m)
        result.append(LegalMove(
            move=m,
            algebraic=move_to_algebraic(m),
            src=sq_to_algebraic(src),
            dst=sq_to_algebraic(dst),
        ))
    return LegalMovesResponse(moves=result)


@app.post("/games/{game_id}/move", response_model=MoveResponse)
async def make_move(game_id: str, request: MakeMoveRequest):
    """Make a move in the game."""
    game = get_game_or_404(game_id)
    src = parse_square(request.src)
    dst = parse_square(request.dst)

    if game.engine.aborted:
        raise HTTPException(status_code=409, detail="Game aborted after an internal error; reset required")
    if game.engine.state.is_terminal():
        raise HTTPException(status_code=409, detail="Game already finished")

    try:
        result = game.engine.apply_move(src, dst)
    except IllegalMove as e:
        logger.warning("Rejected move %s-%s in game %s: %s", request.src, request.dst, game_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except InvariantViolation as e:
        raise HTTPException(status_code=500, detail=f"Internal error, game aborted: {e}")

    return MoveResponse(
        move=result.algebraic,
        captured=[sq_to_algebraic(sq) for sq in result.captured],
        outcome=result.outcome.value,
        game_state=game.to_response(),
    )


@app.post("/games/{game_id}/reset", response_model=GameStateResponse)
async def reset_game(game_id: str):
    """Restart the game from the starting layout."""
    game = get_game_or_404(game_id)
    game.engine.reset()
    return game.to_response()


# --- Entry Point ---

def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
