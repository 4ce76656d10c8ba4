from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subject:
    """Entitas domain: Mata pelajaran."""

    id: int
    nama_pelajaran: str
    kode_pelajaran: str
    deskripsi: Optional[str] = None
