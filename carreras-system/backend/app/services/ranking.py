"""Photographer ranking.

Each photographer gets four raw metrics (photo volume, downloads,
downloads per photo, unique-download reach). Every metric is normalized
against the best value in the result set, and the score is the mean of
the components the caller enabled.
"""

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class FotografoTotales:
    """Summed assignment counters for one photographer."""

    fotografo_id: int
    nombre: str
    fotos_totales: int = 0
    descargas_totales: int = 0
    descargas_unicas_totales: int = 0


@dataclass(frozen=True)
class RankingComponents:
    volumen: bool = True
    descargas: bool = True
    eficiencia: bool = True
    reach: bool = True


@dataclass(frozen=True)
class RankingEntry:
    fotografo_id: int
    nombre: str
    fotos_totales: int
    descargas_totales: int
    descargas_unicas_totales: int
    pct_desc_fotos: float
    reach: float
    score_volumen: float
    score_descargas: float
    score_eficiencia: float
    score_reach: float
    score: float


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _collation_key(nombre: str) -> tuple[str, str, str]:
    """Locale-like ordering: accents and case only break ties, lowercase first."""
    folded = nombre.casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(ch)
    )
    return base, folded, nombre.swapcase()


def rank_fotografos(
    totales: Iterable[FotografoTotales],
    components: RankingComponents = RankingComponents(),
) -> list[RankingEntry]:
    """Score and order photographers, best first.

    Only photographers present in ``totales`` are ranked; the caller
    decides which assignment rows (all events, or one event) were summed.
    """
    base = []
    for t in totales:
        fotos = t.fotos_totales or 0
        descargas = t.descargas_totales or 0
        unicas = t.descargas_unicas_totales or 0
        base.append((t, fotos, descargas, unicas, _ratio(descargas, fotos), _ratio(unicas, descargas)))

    if not base:
        return []

    max_vol = max(row[1] for row in base)
    max_desc = max(row[2] for row in base)
    max_efi = max(row[4] for row in base)
    max_reach = max(row[5] for row in base)

    entries = []
    for t, fotos, descargas, unicas, pct_desc_fotos, reach in base:
        score_volumen = _ratio(fotos, max_vol)
        score_descargas = _ratio(descargas, max_desc)
        score_eficiencia = _ratio(pct_desc_fotos, max_efi)
        score_reach = _ratio(reach, max_reach)

        enabled = []
        if components.volumen:
            enabled.append(score_volumen)
        if components.descargas:
            enabled.append(score_descargas)
        if components.eficiencia:
            enabled.append(score_eficiencia)
        if components.reach:
            enabled.append(score_reach)
        score = sum(enabled) / len(enabled) if enabled else 0.0

        entries.append(
            RankingEntry(
                fotografo_id=t.fotografo_id,
                nombre=t.nombre,
                fotos_totales=fotos,
                descargas_totales=descargas,
                descargas_unicas_totales=unicas,
                pct_desc_fotos=pct_desc_fotos,
                reach=reach,
                score_volumen=score_volumen,
                score_descargas=score_descargas,
                score_eficiencia=score_eficiencia,
                score_reach=score_reach,
                score=score,
            )
        )

    entries.sort(key=lambda e: (-e.score, _collation_key(e.nombre or "")))
    return entries
