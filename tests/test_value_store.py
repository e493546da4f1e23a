# tests/test_value_store.py
import asyncio

import pytest

from bsg_helpdesk.forms.value_store import FieldValueStore


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, name, value):
        self.calls.append((name, value))


@pytest.mark.asyncio
async def test_rapid_keystrokes_commit_once_with_last_value():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec, debounce=0.2)
    for partial in ("B", "Bu", "Bud", "Budi"):
        store.input("nama", partial)
        await asyncio.sleep(0.01)
    # displayed immediately, committed only after the window
    assert store.displayed("nama") == "Budi"
    assert store.committed("nama") == ""
    assert rec.calls == []

    await asyncio.sleep(0.4)
    assert rec.calls == [("nama", "Budi")]
    assert store.values() == {"nama": "Budi"}
    assert not store.is_pending()


def test_default_debounce_is_300ms():
    assert FieldValueStore().debounce == 0.3


@pytest.mark.asyncio
async def test_blur_commits_immediately():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec, debounce=10)
    store.input("kode", "U001")
    assert store.is_pending("kode")
    store.blur("kode")
    assert not store.is_pending("kode")
    assert rec.calls == [("kode", "U001")]


@pytest.mark.asyncio
async def test_separate_fields_debounce_independently():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec, debounce=0.03)
    store.input("a", "1")
    store.input("b", "2")
    await asyncio.sleep(0.1)
    assert sorted(rec.calls) == [("a", "1"), ("b", "2")]


@pytest.mark.asyncio
async def test_flush_and_close():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec, debounce=10)
    store.input("a", "1")
    store.input("b", "2")
    store.flush()
    store.input("c", "3")
    store.close()
    await asyncio.sleep(0)

    assert sorted(rec.calls) == [("a", "1"), ("b", "2")]
    assert store.displayed("c") == "3"
    assert store.committed("c") == ""


@pytest.mark.asyncio
async def test_set_is_an_immediate_external_write():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec, debounce=10)
    store.input("tanggal", "2024-01")
    store.set("tanggal", "2024-01-31")
    await asyncio.sleep(0)

    assert rec.calls == [("tanggal", "2024-01-31")]
    assert not store.is_pending("tanggal")


def test_unchanged_value_is_not_recommitted():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec)
    store.set("a", "x")
    store.set("a", "x")
    assert rec.calls == [("a", "x")]


def test_without_event_loop_input_commits_synchronously():
    rec = Recorder()
    store = FieldValueStore(on_commit=rec)
    store.input("a", "hello")
    assert rec.calls == [("a", "hello")]
    assert store.committed("a") == "hello"
