# tests/test_form_session.py
import asyncio
from datetime import datetime

import httpx
import pytest

from bsg_helpdesk.core.errors import FormValidationError
from bsg_helpdesk.forms.client import BsgApiClient
from bsg_helpdesk.forms.master_data import MasterDataLoader
from bsg_helpdesk.forms.models import FieldOption, TemplateField
from bsg_helpdesk.forms.session import FormSession

BRANCHES = [
    {"id": 1, "code": "001", "name": "Kantor Pusat", "display_name": "001 - Kantor Pusat", "sort_order": 1},
    {"id": 2, "code": "002", "name": "Cabang Utama Manado", "sort_order": 2},
]


def mutasi_fields():
    return [
        TemplateField(field_name="Tanggal berlaku", field_label="Tanggal berlaku",
                      field_type="date", is_required=True, category="timing", sort_order=4),
        TemplateField(field_name="Cabang/Capem", field_label="Cabang/Capem",
                      field_type="dropdown_branch", is_required=True, category="location", sort_order=1),
        TemplateField(field_name="Kode User", field_label="Kode User", field_type="text_short",
                      is_required=True, category="user_identity", sort_order=2, max_length=10),
        TemplateField(field_name="Jenis", field_label="Jenis", field_type="dropdown", sort_order=3,
                      options=[FieldOption(value="b", label="B", sort_order=2),
                               FieldOption(value="a", label="A", sort_order=1)]),
    ]


def make_loader(handler) -> MasterDataLoader:
    client = BsgApiClient(base_url="http://bsg.test/api", transport=httpx.MockTransport(handler))
    return MasterDataLoader(client)


def branch_handler(request):
    if request.url.path.endswith("/branch"):
        return httpx.Response(200, json=BRANCHES)
    return httpx.Response(404)


@pytest.mark.asyncio
async def test_load_fills_dropdowns_and_date_defaults():
    session = FormSession(mutasi_fields(), loader=make_loader(branch_handler), debounce=0.05)
    assert session.loading is True
    await session.load()

    assert session.loading is False
    assert [f.field_name for f in session.fields] == ["Cabang/Capem", "Kode User", "Jenis", "Tanggal berlaku"]
    assert [o.label for o in session.options_for("Cabang/Capem")] == ["001 - Kantor Pusat", "Cabang Utama Manado"]
    # static options win over master data and keep their sort order
    assert [o.value for o in session.options_for("Jenis")] == ["a", "b"]
    assert session.values()["Tanggal berlaku"] == datetime.now().strftime("%Y-%m-%d")


@pytest.mark.asyncio
async def test_failed_dropdown_fetch_still_renders_with_no_options():
    def failing(request):
        return httpx.Response(500)

    session = FormSession(mutasi_fields(), loader=make_loader(failing), debounce=0.05)
    await session.load()

    assert session.loading is False
    assert session.options_for("Cabang/Capem") == []
    sections = session.sections()
    assert "Cabang/Capem" in [f.field_name for s in sections for f in s.fields]


@pytest.mark.asyncio
async def test_reload_retries_failed_dropdowns():
    calls = []

    def flaky(request):
        calls.append(request.url.path)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=BRANCHES)

    session = FormSession(mutasi_fields(), loader=make_loader(flaky), debounce=0.05)
    await session.load()
    assert session.options_for("Cabang/Capem") == []

    await session.load()
    assert len(calls) == 2
    assert session.loading is False
    assert [o.value for o in session.options_for("Cabang/Capem")] == ["001", "002"]


@pytest.mark.asyncio
async def test_debounced_input_revalidates_after_commit():
    session = FormSession(mutasi_fields(), debounce=0.05)
    session.input("Kode User", "")
    await asyncio.sleep(0.15)
    assert session.errors == {"Kode User": "Kode User is required"}

    session.input("Kode User", "U0")
    session.input("Kode User", "U001")
    assert session.values().get("Kode User") == ""
    await asyncio.sleep(0.15)
    assert "Kode User" not in session.errors
    assert session.values()["Kode User"] == "U001"


def test_text_input_is_cut_at_max_length():
    session = FormSession(mutasi_fields(), debounce=0)
    session.input("Kode User", "ABCDEFGHIJKLMN")
    assert session.values()["Kode User"] == "ABCDEFGHIJ"


def test_submit_is_blocked_while_options_load():
    session = FormSession(mutasi_fields(), loader=make_loader(branch_handler), debounce=0)
    assert session.can_submit is False
    with pytest.raises(FormValidationError):
        session.submit()


def test_without_loader_nothing_is_pending():
    session = FormSession(mutasi_fields(), debounce=0)
    assert session.loading is False


def test_submit_reports_missing_required_fields():
    session = FormSession(mutasi_fields(), debounce=0)
    session.input("Kode User", "U001")
    with pytest.raises(FormValidationError) as exc:
        session.submit()
    assert exc.value.errors == {
        "Tanggal berlaku": "Tanggal berlaku is required",
        "Cabang/Capem": "Cabang/Capem is required",
    }


def test_submit_returns_unformatted_payload():
    fields = [
        TemplateField(field_name="Nominal Transaksi", field_label="Nominal Transaksi",
                      field_type="currency", is_required=True),
        TemplateField(field_name="Nomor Kartu", field_label="Nomor Kartu", field_type="text",
                      max_length=16),
    ]
    session = FormSession(fields, debounce=0)
    session.input("Nominal Transaksi", "Rp 1.500.000")
    session.input("Nomor Kartu", "1234 5678 1234 5678")
    assert session.display_value("Nominal Transaksi") == "Rp 1.500.000"
    assert session.display_value("Nomor Kartu") == "1234-5678-1234-5678"
    assert session.can_submit is True
    assert session.submit() == {"Nominal Transaksi": "1500000", "Nomor Kartu": "1234567812345678"}


def test_negative_amount_blocks_submit():
    field = TemplateField(field_name="Nominal", field_label="Nominal", field_type="currency")
    session = FormSession([field], debounce=0)
    session.input("Nominal", "-1000")
    assert "positive" in session.errors["Nominal"]
    with pytest.raises(FormValidationError) as exc:
        session.submit()
    assert "positive" in exc.value.errors["Nominal"]


def test_unknown_field_name():
    session = FormSession(mutasi_fields(), debounce=0)
    with pytest.raises(KeyError):
        session.input("Nope", "x")
