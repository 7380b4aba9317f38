"""
Tests for the programs spreadsheet import and demo seeding.
"""

from openpyxl import Workbook

from campaign_admin.importer import import_programs
from campaign_admin.models import PROGRAM_IMPORT_COLUMNS
from campaign_admin.seed import seed_demo_data


def _program_row(name, **overrides):
    values = {col: f"{col}-{name}" for col in PROGRAM_IMPORT_COLUMNS}
    values["nombre_programa"] = name
    values.update(overrides)
    return [values[col] for col in PROGRAM_IMPORT_COLUMNS]


def _write_csv(path, rows):
    path.write_text("\n".join(";".join(r) for r in rows), encoding="utf-8")


def test_import_csv(storage, tmp_path):
    path = tmp_path / "programs_data.csv"
    _write_csv(path, [
        PROGRAM_IMPORT_COLUMNS,
        _program_row("MBA Ejecutivo", facultad="Administración", pp4d=""),
        [],
        ["too", "short"],
        _program_row("Derecho"),
    ])

    assert import_programs(storage.session, path) == 2

    programs = {p.nombre_programa: p for p in storage.programs.list()}
    assert set(programs) == {"MBA Ejecutivo", "Derecho"}
    assert programs["MBA Ejecutivo"].facultad == "Administración"
    assert programs["MBA Ejecutivo"].pp4d is None
    assert programs["Derecho"].link_programa == "link_programa-Derecho"


def test_import_skips_when_programs_exist(storage, tmp_path):
    storage.programs.create({"nombre_programa": "Existente"})
    path = tmp_path / "programs_data.csv"
    _write_csv(path, [PROGRAM_IMPORT_COLUMNS, _program_row("Nuevo")])

    assert import_programs(storage.session, path) == 0
    assert [p.nombre_programa for p in storage.programs.list()] == ["Existente"]


def test_import_missing_file(storage, tmp_path):
    assert import_programs(storage.session, tmp_path / "nope.csv") == 0


def test_import_xlsx(storage, tmp_path):
    wb = Workbook()
    ws = wb.active
    ws.append(PROGRAM_IMPORT_COLUMNS)
    ws.append(_program_row("Ingeniería de Sistemas", modalidad="Virtual"))
    path = tmp_path / "programs.xlsx"
    wb.save(path)

    assert import_programs(storage.session, path) == 1
    [p] = storage.programs.list()
    assert p.nombre_programa == "Ingeniería de Sistemas"
    assert p.modalidad == "Virtual"


def test_seed_demo_data_only_once(storage):
    assert seed_demo_data(storage.session) is True
    assert seed_demo_data(storage.session) is False
    assert len(storage.campaigns.list()) == 3
    assert len(storage.ad_groups.list()) == 4
    assert len(storage.ads.list()) == 6


def test_cli_import_programs(app, tmp_path):
    path = tmp_path / "programs_data.csv"
    _write_csv(path, [PROGRAM_IMPORT_COLUMNS, _program_row("MBA")])

    result = app.test_cli_runner().invoke(args=["import-programs", str(path)])
    assert result.exit_code == 0
    assert "Imported 1 programs." in result.output


def test_import_csv_keeps_undecodable_bytes_as_replacement(storage, tmp_path):
    path = tmp_path / "programs_data.csv"
    header = ";".join(PROGRAM_IMPORT_COLUMNS).encode("utf-8")
    row = ";".join(_program_row("MBA")).encode("utf-8").replace(b"MBA;", b"MBA \xff;", 1)
    path.write_bytes(header + b"\n" + row)

    assert import_programs(storage.session, path) == 1
    [program] = storage.programs.list()
    assert program.nombre_programa == "MBA \ufffd"
