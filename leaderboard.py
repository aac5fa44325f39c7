import os, json, time, threading, urllib.request

from config import DATA_DIR

"""Local high-score table.

The top ten scores are kept in a small JSON file next to the game.  The very
first time the game runs (no local file yet) the table is seeded once from a
read-only source: the URL in the BRICK_WALL_SCORES_URL environment variable
when it is set, otherwise the ``highscores.json`` shipped with the game.  The
seeded list is written to the local file so later runs never look at the seed
again.

Usage (from the shell):
    import leaderboard

    if leaderboard.is_high_score(score):
        leaderboard.add_score_async({"name": name, "score": score,
                                     "date": leaderboard.now_ms()})

Nothing in here raises on I/O trouble; failures are logged and the caller
gets an empty table instead.
"""

MAX_SCORES = 10
SCORES_FILE = os.path.join(DATA_DIR, "highscores_local.json")
SEED_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "highscores.json")
SEED_URL_ENV = "BRICK_WALL_SCORES_URL"
FALLBACK_NAME = "Anonymous"

# Serialises reads and writes of SCORES_FILE across save threads
_lock = threading.RLock()

# ------------------------------------------------------------------------

def _load_json(path: str, default):
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            print("[Leaderboard] Failed to read", path, ":", e)
    return default

def _save_json(path: str, data):
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        print("[Leaderboard] Failed to save", path, ":", e)

def now_ms() -> int:
    return int(time.time() * 1000)

# --------------------------------------------------------------------
#  Entry validation
# --------------------------------------------------------------------

def _clean_entry(raw):
    """Return a well-formed entry, or None when *raw* can't be salvaged."""
    if not isinstance(raw, dict):
        return None
    try:
        score = int(raw.get("score"))
    except (TypeError, ValueError):
        return None
    try:
        date = int(raw.get("date") or 0)
    except (TypeError, ValueError):
        date = 0
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        name = FALLBACK_NAME
    return {"name": name, "score": score, "date": date}

def _clean_entries(raw_list):
    if not isinstance(raw_list, list):
        return []
    cleaned = [e for e in (_clean_entry(r) for r in raw_list) if e is not None]
    cleaned.sort(key=lambda e: e["score"], reverse=True)
    return cleaned[:MAX_SCORES]

# --------------------------------------------------------------------
#  Seeding (first run only)
# --------------------------------------------------------------------

def _download_seed(url: str):
    try:
        with urllib.request.urlopen(url, timeout=5) as resp:
            return json.loads(resp.read().decode("utf-8", errors="replace"))
    except Exception as e:
        print("[Leaderboard] Seed fetch error:", e)
        return []

def _read_seed():
    url = os.getenv(SEED_URL_ENV)
    if url:
        return _download_seed(url)
    return _load_json(SEED_FILE, [])

# --------------------------------------------------------------------
#  Public API
# --------------------------------------------------------------------

def list_scores():
    """Return up to ten entries, best first."""
    with _lock:
        if os.path.exists(SCORES_FILE):
            return _clean_entries(_load_json(SCORES_FILE, []))

        scores = _clean_entries(_read_seed())
        if scores:
            _save_json(SCORES_FILE, scores)
        return scores

def is_high_score(score: int) -> bool:
    """True if *score* would make it onto the table."""
    if score <= 0:
        return False
    scores = list_scores()
    if len(scores) < MAX_SCORES:
        return True
    return score > scores[-1]["score"]

def add_score(entry: dict) -> bool:
    """Insert *entry* and keep the best ten. Returns True when stored."""
    score = entry.get("score", 0)
    if not isinstance(score, int) or score <= 0:
        return False
    if not entry.get("name"):
        print("[Leaderboard] Attempted to add high score with no name.")
        return False

    new_entry = {"name": entry["name"], "score": score, "date": entry.get("date") or now_ms()}
    with _lock:
        scores = list_scores() + [new_entry]
        scores.sort(key=lambda e: e["score"], reverse=True)
        _save_json(SCORES_FILE, scores[:MAX_SCORES])
    print(f"[Leaderboard] Saved {new_entry['name']}: {score}")
    return True

def add_score_async(entry: dict) -> threading.Thread:
    """Save on a background thread so the frame loop never waits on disk."""
    worker = threading.Thread(target=add_score, args=(entry,), daemon=True)
    worker.start()
    return worker
