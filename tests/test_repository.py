"""
Tests for the storage layer: CRUD, search with counts, hierarchy and cascades.
"""

import pytest
from sqlalchemy import event

from campaign_admin.errors import ValidationError
from campaign_admin.models import AdGroup, Ad


def _build_tree(storage, make_campaign):
    """Two campaigns: 'a' with groups of 2 and 1 ads, 'b' with one empty group."""
    a = make_campaign(nombre_campania="Alpha Líderes", medio="Google Ads", facultad="Administración")
    b = make_campaign(nombre_campania="Beta", medio="Facebook Ads", programa_interes="Ingeniería",
                      tipo_campana="Reconocimiento", facultad="Ingeniería")
    g1 = storage.ad_groups.create({"campaign_id": a.id, "numero_grupo": 2, "nombre_grupo": "Mid"})
    g2 = storage.ad_groups.create({"campaign_id": a.id, "numero_grupo": 1, "nombre_grupo": "Senior"})
    g3 = storage.ad_groups.create({"campaign_id": b.id, "numero_grupo": 1})
    storage.ads.create({"ad_group_id": g1.id, "nombre_anuncio": "x1", "numero_grupo": 2})
    storage.ads.create({"ad_group_id": g1.id, "nombre_anuncio": "x2", "numero_grupo": 1})
    storage.ads.create({"ad_group_id": g2.id, "nombre_anuncio": "y1"})
    return a, b, (g1, g2, g3)


# ---------------- CRUD ----------------

def test_create_campaign_sets_timestamps(make_campaign):
    c = make_campaign()
    assert c.id is not None
    assert c.created_at is not None
    assert c.updated_at == c.created_at


@pytest.mark.parametrize("missing", ["nombre_campania", "medio", "programa_interes", "tipo_campana"])
def test_create_campaign_requires_fields(storage, missing):
    data = {"nombre_campania": "X", "medio": "Google Ads", "programa_interes": "MBA", "tipo_campana": "Conversión"}
    del data[missing]
    with pytest.raises(ValidationError) as exc:
        storage.campaigns.create(data)
    assert [e["field"] for e in exc.value.errors] == [missing]


def test_create_campaign_rejects_empty_required_fields(storage):
    with pytest.raises(ValidationError) as exc:
        storage.campaigns.create({"nombre_campania": "", "medio": "", "programa_interes": "MBA", "tipo_campana": "C"})
    assert {e["field"] for e in exc.value.errors} == {"nombre_campania", "medio"}


def test_create_rejects_non_object(storage):
    with pytest.raises(ValidationError):
        storage.campaigns.create(None)
    with pytest.raises(ValidationError):
        storage.programs.create(["nombre_programa"])


def test_create_ignores_server_managed_keys(storage, make_campaign):
    c = make_campaign(id=999, created_at="1999-01-01")
    assert c.id != 999
    assert c.created_at.year != 1999


def test_list_is_newest_first(storage, make_campaign):
    first = make_campaign(nombre_campania="first")
    second = make_campaign(nombre_campania="second")
    assert [c.id for c in storage.campaigns.list()] == [second.id, first.id]


def test_get_missing_returns_none(storage):
    assert storage.campaigns.get(12345) is None
    assert storage.programs.get(12345) is None


def test_update_merges_only_given_fields(storage, make_campaign):
    c = make_campaign(facultad="Derecho")
    before = c.updated_at
    updated = storage.campaigns.update(c.id, {"medio": "LinkedIn Ads"})
    assert updated.medio == "LinkedIn Ads"
    assert updated.facultad == "Derecho"
    assert updated.nombre_campania == "MBA Ejecutivo 2024"
    assert updated.updated_at >= before


def test_update_can_clear_optional_field(storage, make_campaign):
    c = make_campaign(facultad="Derecho")
    assert storage.campaigns.update(c.id, {"facultad": None}).facultad is None


def test_update_rejects_blanking_required_field(storage, make_campaign):
    c = make_campaign()
    with pytest.raises(ValidationError):
        storage.campaigns.update(c.id, {"medio": ""})
    with pytest.raises(ValidationError):
        storage.campaigns.update(c.id, {"medio": None})


def test_update_missing_returns_none(storage):
    assert storage.campaigns.update(4242, {"medio": "Google Ads"}) is None


def test_delete_reports_whether_removed(storage, make_campaign):
    cid = make_campaign().id
    assert storage.campaigns.delete(cid) is True
    assert storage.campaigns.delete(cid) is False
    assert storage.campaigns.get(cid) is None


def test_ad_group_requires_existing_campaign(storage):
    with pytest.raises(ValidationError) as exc:
        storage.ad_groups.create({"campaign_id": 777})
    assert exc.value.errors[0]["field"] == "campaign_id"


def test_ad_group_requires_campaign_id(storage):
    with pytest.raises(ValidationError) as exc:
        storage.ad_groups.create({"nombre_grupo": "orphan"})
    assert exc.value.errors[0]["field"] == "campaign_id"


def test_ad_requires_existing_ad_group(storage, make_campaign):
    with pytest.raises(ValidationError) as exc:
        storage.ads.create({"ad_group_id": 888})
    assert exc.value.errors[0]["field"] == "ad_group_id"


def test_moving_ad_group_to_missing_campaign_is_rejected(storage, make_campaign):
    c = make_campaign()
    g = storage.ad_groups.create({"campaign_id": c.id})
    with pytest.raises(ValidationError):
        storage.ad_groups.update(g.id, {"campaign_id": c.id + 100})


def test_numero_grupo_must_be_integer(storage, make_campaign):
    c = make_campaign()
    with pytest.raises(ValidationError) as exc:
        storage.ad_groups.create({"campaign_id": c.id, "numero_grupo": "uno"})
    assert exc.value.errors[0]["field"] == "numero_grupo"


def test_program_requires_name(storage):
    with pytest.raises(ValidationError):
        storage.programs.create({"facultad": "Derecho"})
    p = storage.programs.create({"nombre_programa": "MBA", "pp1": "Liderazgo"})
    assert p.pp1 == "Liderazgo"


def test_list_children_ordered_by_numero_grupo(storage, make_campaign):
    a, _, (g1, g2, _) = _build_tree(storage, make_campaign)
    assert [g.id for g in storage.ad_groups.list_by_campaign(a.id)] == [g2.id, g1.id]
    assert [ad.nombre_anuncio for ad in storage.ads.list_by_ad_group(g1.id)] == ["x2", "x1"]
    assert storage.ad_groups.list_by_campaign(9999) == []


# ---------------- Cascades ----------------

def test_deleting_campaign_cascades(storage, make_campaign):
    a, b, (g1, g2, g3) = _build_tree(storage, make_campaign)
    a_id, b_id = a.id, b.id
    g1_id, g2_id, g3_id = g1.id, g2.id, g3.id
    assert storage.campaigns.delete(a_id)

    # Deleted rows are gone for lookups and for a second delete
    assert storage.ad_groups.get(g1_id) is None
    assert storage.ad_groups.get(g2_id) is None
    assert storage.ad_groups.delete(g1_id) is False
    assert storage.session.query(Ad).all() == []
    assert storage.campaigns.get(b_id) is not None
    assert storage.ad_groups.get(g3_id) is not None


def test_deleting_ad_group_keeps_siblings(storage, make_campaign):
    a, b, (g1, g2, g3) = _build_tree(storage, make_campaign)
    a_id, g1_id, g2_id, g3_id = a.id, g1.id, g2.id, g3.id
    assert storage.ad_groups.delete(g1_id)

    assert [ad.nombre_anuncio for ad in storage.ads.list()] == ["y1"]
    assert {g.id for g in storage.session.query(AdGroup).all()} == {g2_id, g3_id}
    assert storage.campaigns.get(a_id) is not None


# ---------------- Search ----------------

def test_search_without_filters_matches_list(storage, make_campaign):
    a, b, _ = _build_tree(storage, make_campaign)
    results = storage.search_campaigns({})
    assert [r.campaign.id for r in results] == [c.id for c in storage.campaigns.list()]
    counts = {r.campaign.id: (r.grupo_count, r.anuncio_count) for r in results}
    assert counts == {a.id: (2, 3), b.id: (1, 0)}


def test_search_counts_zero_for_campaign_without_groups(storage, make_campaign):
    c = make_campaign()
    [r] = storage.search_campaigns()
    assert (r.campaign.id, r.grupo_count, r.anuncio_count) == (c.id, 0, 0)


def test_search_substring_filters_are_case_insensitive(storage, make_campaign):
    a, b, _ = _build_tree(storage, make_campaign)
    assert [r.campaign.id for r in storage.search_campaigns({"nombre_campania": "LÍDERES"})] == [a.id]
    assert [r.campaign.id for r in storage.search_campaigns({"programa_interes": "ingen"})] == [b.id]


def test_search_exact_filters(storage, make_campaign):
    a, b, _ = _build_tree(storage, make_campaign)
    assert [r.campaign.id for r in storage.search_campaigns({"medio": "Google Ads"})] == [a.id]
    assert storage.search_campaigns({"medio": "Google"}) == []
    assert [r.campaign.id for r in storage.search_campaigns({"facultad": "Ingeniería"})] == [b.id]
    assert [r.campaign.id for r in storage.search_campaigns({"tipo_campana": "Conversión"})] == [a.id]


def test_search_filters_are_conjunctive(storage, make_campaign):
    a, b, _ = _build_tree(storage, make_campaign)
    assert storage.search_campaigns({"medio": "Google Ads", "facultad": "Ingeniería"}) == []
    hits = storage.search_campaigns({"medio": "Facebook Ads", "tipo_campana": "Reconocimiento"})
    assert [r.campaign.id for r in hits] == [b.id]


def test_search_treats_empty_filters_as_unset(storage, make_campaign):
    _build_tree(storage, make_campaign)
    assert len(storage.search_campaigns({"medio": "", "facultad": ""})) == 2


def test_search_skips_campaigns_with_null_fields(storage, make_campaign):
    make_campaign(facultad=None)
    assert storage.search_campaigns({"facultad": "Derecho"}) == []


def test_search_exact_filter_does_not_trim(storage, make_campaign):
    make_campaign(medio="Google Ads")
    assert storage.search_campaigns({"medio": "Google Ads "}) == []


def test_search_counts_query_binds_no_campaign_ids(storage, make_campaign):
    for i in range(5):
        c = make_campaign(nombre_campania=f"C{i}")
        storage.ad_groups.create({"campaign_id": c.id})

    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        statements.append((statement, parameters))

    engine = storage.session.get_bind()
    event.listen(engine, "before_cursor_execute", capture)
    try:
        results = storage.search_campaigns()
    finally:
        event.remove(engine, "before_cursor_execute", capture)

    assert [r.grupo_count for r in results] == [1] * 5
    [(sql, params)] = [(s, p) for s, p in statements if "GROUP BY" in s]
    assert " IN " not in sql
    assert not params


# ---------------- Hierarchy ----------------

def test_complete_hierarchy_nests_and_orders(storage, make_campaign):
    a, b, (g1, g2, g3) = _build_tree(storage, make_campaign)
    tree = storage.get_complete_hierarchy()

    assert [c.id for c in tree] == [b.id, a.id]
    assert [g.id for g in tree[1].ad_groups] == [g2.id, g1.id]
    assert [ad.nombre_anuncio for ad in tree[1].ad_groups[1].ads] == ["x2", "x1"]
    assert tree[0].ad_groups[0].ads == []


def test_end_to_end_example(storage):
    c = storage.campaigns.create({
        "nombre_campania": "X", "medio": "Google Ads",
        "programa_interes": "MBA", "tipo_campana": "Conversión",
    })
    g = storage.ad_groups.create({"campaign_id": c.id, "numero_grupo": 1})
    storage.ads.create({"ad_group_id": g.id})

    tree = storage.get_complete_hierarchy()
    assert len(tree) == 1
    assert len(tree[0].ad_groups) == 1
    assert len(tree[0].ad_groups[0].ads) == 1

    [r] = storage.search_campaigns({"medio": "Google Ads"})
    assert (r.campaign.id, r.grupo_count, r.anuncio_count) == (c.id, 1, 1)
