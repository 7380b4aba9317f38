"""CSV exports of the complete hierarchy and of campaign search results.

A value is quoted only when it contains a comma, a double quote or "\\n";
inner quotes are doubled. A bare "\\r" is written as-is.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

BOM = "\ufeff"

EXPORT_HEADER = [
    "Campaña",
    "Medio",
    "Programa",
    "Facultad",
    "Tipo",
    "Línea",
    "Modalidad",
    "Lista Pardot",
    "URL",
    "Grupo",
    "FSA",
    "Cohorte",
    "Tipo Público",
    "Anuncio",
    "Tipo Anuncio",
    "Nomenclatura Pardot",
]

_NEEDS_QUOTES = (",", '"', "\n")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def escape_csv_value(value: Any) -> str:
    s = _text(value)
    if any(ch in s for ch in _NEEDS_QUOTES):
        return '"' + s.replace('"', '""') + '"'
    return s


def render_csv(rows: Iterable[Sequence[Any]]) -> str:
    """Comma-separated fields, newline-separated rows, UTF-8 BOM in front."""
    return BOM + "\n".join(",".join(escape_csv_value(v) for v in row) for row in rows)


def flatten_hierarchy(campaigns) -> list[list[Any]]:
    """One row per ad, carrying its group's and campaign's columns.

    Campaigns and groups without ads produce no rows.
    """
    rows = []
    for c in campaigns:
        for g in c.ad_groups:
            for a in g.ads:
                rows.append([
                    _text(c.nombre_campania),
                    _text(c.medio),
                    _text(c.programa_interes),
                    _text(c.facultad),
                    _text(c.tipo_campana),
                    _text(c.linea),
                    _text(c.modalidad_estudio),
                    _text(c.lista_pardot),
                    _text(c.url_programa),
                    f"{_text(g.numero_grupo)} - {_text(g.nombre_grupo)}",
                    _text(g.fsa),
                    _text(g.cohorte),
                    _text(g.tipo_publico),
                    _text(a.nombre_anuncio),
                    _text(a.tipo_anuncio),
                    _text(a.nomenclatura_pardot),
                ])
    return rows


def export_hierarchy_csv(campaigns) -> str:
    return render_csv([EXPORT_HEADER, *flatten_hierarchy(campaigns)])


# ---------------- Search results ----------------

SEARCH_EXPORT_HEADER = [
    "Campaña",
    "Medio",
    "Programa",
    "Facultad",
    "Tipo",
    "Grupos",
    "Anuncios",
]


def flatten_search_results(results) -> list[list[Any]]:
    """One row per search result; missing counts are written as 0."""
    rows = []
    for r in results:
        c = r.campaign
        rows.append([
            _text(c.nombre_campania),
            _text(c.medio),
            _text(c.programa_interes),
            _text(c.facultad),
            _text(c.tipo_campana),
            r.grupo_count if r.grupo_count is not None else 0,
            r.anuncio_count if r.anuncio_count is not None else 0,
        ])
    return rows


def export_search_results_csv(results) -> str:
    return render_csv([SEARCH_EXPORT_HEADER, *flatten_search_results(results)])
