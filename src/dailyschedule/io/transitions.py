import json
from pathlib import Path
from typing import Iterable

from ..handlers.switch import SwitchTransition


def write_transitions(transitions: Iterable[SwitchTransition], path: str) -> int:
  """Write switch transitions as JSON lines; returns the number of rows."""
  out = Path(path)
  out.parent.mkdir(parents=True, exist_ok=True)
  count = 0
  with out.open("w", encoding="utf-8") as f:
    for t in transitions:
      f.write(json.dumps(t.to_dict(), ensure_ascii=False) + "\n")
      count += 1
  return count
