"""
Production Limit Rules - Web Service
======================================
FastAPI server exposing the limit queries over HTTP.

Usage:
    python -m build_limits.web
    python cli.py web [--port 8080]
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from build_limits.io import load_rule_set, parse_world, rules_to_json
from build_limits.limits import ConfigurationError, RuleSet
from build_limits.production import evaluate_units

# Paths
DATA_DIR = Path(__file__).parent.parent / "data"
RULES_DIR = DATA_DIR / "rules"

app = FastAPI(title="Production Limit Rules")


# ---------------------------------------------------------------------------
# Pydantic models for request/response
# ---------------------------------------------------------------------------

class EvaluateRequest(BaseModel):
    ruleset: str
    player: str
    world: dict[str, dict[str, int]] = {}   # player -> actor type -> count
    units: list[str] = []                   # empty = every limited unit


class RuleOut(BaseModel):
    limited_unit: Optional[str] = None
    stop_triggers: Optional[dict[str, int]] = None
    start_triggers: Optional[dict[str, int]] = None
    aggregate_all_for_stop: bool = False
    aggregate_all_for_start: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _ruleset_path(name: str) -> Path:
    if not name or Path(name).name != name:
        raise HTTPException(400, f"Invalid rule set name: {name}")
    path = RULES_DIR / f"{name}.yaml"
    if not path.exists():
        raise HTTPException(404, f"Rule set not found: {name}")
    return path


def _load(name: str) -> RuleSet:
    path = _ruleset_path(name)
    try:
        return load_rule_set(str(path))
    except ConfigurationError as e:
        raise HTTPException(400, f"Invalid rule set {name}: {e}")


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/rulesets")
def api_rulesets():
    """List rule sets available in the rules directory."""
    if not RULES_DIR.exists():
        return []
    return sorted(p.stem for p in RULES_DIR.glob("*.yaml"))


@app.get("/api/rulesets/{name}", response_model=list[RuleOut])
def api_ruleset(name: str):
    return rules_to_json(_load(name))


@app.post("/api/evaluate")
def api_evaluate(req: EvaluateRequest):
    rule_set = _load(req.ruleset)
    try:
        world = parse_world({"players": req.world})
    except ConfigurationError as e:
        raise HTTPException(400, str(e))

    reports = evaluate_units(rule_set, req.units, world, req.player)
    return {
        "ruleset": req.ruleset,
        "player": req.player,
        "reports": [r.to_dict() for r in reports],
    }


def start_server(port: int = 8080):
    """Start the uvicorn server."""
    print(f"[web] Serving production limit rules from {RULES_DIR} at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    start_server()
