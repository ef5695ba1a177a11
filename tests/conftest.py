from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_LINES = [
    "FLEX|2026-01-01 20:14:32|1600/2/K/A|03.091|002029575 001503282 001503289 001503900|ALN|P 2 BDH-07 Ongeval (los object) Gangetje Leiden 169252",
    "FLEX|2026-01-01 20:15:10|1600/2/K/A|03.091|000120901|ALN|A1 Keizersgracht 12 Amsterdam rit 12345",
    "",
    "FLEX|2026-01-01 20:16:45|1600/2/K/A|03.091|001420999 001420999|ALN|P1 BRT-03, Stationsplein, Rotterdam, woningbrand",
    "# decoder restarted",
    "garbage line without separators",
    "FLEX|2026-01-01 20:17:02|1600/2/K/A|03.091|000725999|ALN|informatie volgt",
    "FLEX|2026-01-01 21:02:00|1600/2/K/A|03.091|000120902|ALN|A1 Utrechtseweg Zeist rit 55555",
]


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)


@pytest.fixture
def write_sample_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text("\n".join(SAMPLE_LINES) + "\n", encoding="utf-8")

    return _write


@pytest.fixture
def write_lines() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")

    return _write
