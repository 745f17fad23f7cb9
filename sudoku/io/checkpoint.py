"""Persist and restore a paused search as a JSON document.

The document holds the original puzzle plus the explicit search state::

    {
      "created_at": "...",
      "candidate_order": "descending",
      "puzzle": [[5, 3, 0, ...], ...],
      "moves": [[1, 3, 4], ...],
      "path": [0, ...],
      "next_candidate_index": 1
    }

Restoring replays ``moves`` on the puzzle, so a checkpoint is only accepted
when its moves follow the puzzle's empty cells in row-major order.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.constants import CandidateOrder
from ..core.exceptions import CheckpointError, SudokuError
from ..core.models import Move, SearchState
from ..engine.board import Board
from ..engine.search import SearchConfig, SearchEngine
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def checkpoint_to_jsonable(engine: SearchEngine) -> Dict[str, Any]:
    state = engine.state
    return {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "candidate_order": engine.generator.order.value,
        "puzzle": engine.puzzle.to_jsonable(),
        "moves": [move.to_jsonable() for move in state.moves],
        "path": list(state.path),
        "next_candidate_index": state.next_candidate_index,
    }


def engine_from_jsonable(
    doc: Dict[str, Any],
    config: Optional[SearchConfig] = None,
    **engine_kwargs: Any,
) -> SearchEngine:
    """Rebuild an engine positioned exactly where the checkpoint left off.

    The candidate order stored in the document wins over ``config`` since the
    recorded offsets are only meaningful under the order that produced them.
    """

    try:
        puzzle = Board.from_rows(doc["puzzle"])
        state = SearchState(
            moves=[Move.of(*entry) for entry in doc["moves"]],
            path=[int(offset) for offset in doc["path"]],
            next_candidate_index=int(doc.get("next_candidate_index", 0)),
        )
        order = CandidateOrder(doc.get("candidate_order", CandidateOrder.DESCENDING.value))
    except (KeyError, TypeError, ValueError, SudokuError) as exc:
        raise CheckpointError(f"Malformed checkpoint: {exc}") from exc

    base = config or SearchConfig()
    engine = SearchEngine(
        puzzle,
        config=SearchConfig(candidate_order=order, max_steps=base.max_steps),
        **engine_kwargs,
    )
    engine.restore(state)
    return engine


def save_checkpoint(engine: SearchEngine, path: Path | str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(checkpoint_to_jsonable(engine), indent=2), encoding="utf-8")
    LOGGER.info("Saved checkpoint at depth %d to %s", engine.depth, target)
    return target


def load_checkpoint(path: Path | str, config: Optional[SearchConfig] = None, **engine_kwargs: Any) -> SearchEngine:
    try:
        doc = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CheckpointError(f"Cannot read checkpoint {path}: {exc}") from exc
    LOGGER.info("Loaded checkpoint from %s", path)
    return engine_from_jsonable(doc, config=config, **engine_kwargs)
