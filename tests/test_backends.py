"""Tests for persistence backends."""

import pytest

from easel.backends.base import SpeechRecord, load_store, save_store
from easel.backends.memory import MemoryBackend
from easel.backends.sqlite import SQLiteBackend
from easel.core.store import GraphStore

from conftest import edge, image_node, instruction_node, text_node


@pytest.fixture(params=["memory", "sqlite"])
def any_backend(request, tmp_path):
    if request.param == "memory":
        return MemoryBackend()
    return SQLiteBackend(db_path=str(tmp_path / "easel.db"))


def sample_store():
    return GraphStore(
        graph_id="board-1",
        nodes=[
            text_node("t", "hello", x=10, y=20),
            image_node("img", style="anime", image_url="https://images.test/a.png"),
            instruction_node("inst", "make it rhyme", locked=True),
        ],
        edges=[edge("t", "inst"), edge("img", "inst")],
    )


@pytest.mark.asyncio
async def test_save_and_load_round_trip(any_backend):
    store = sample_store()

    await save_store(any_backend, store)
    loaded = await load_store(any_backend, "board-1")

    assert loaded.graph_id == "board-1"
    assert list(loaded.nodes) == list(store.nodes)
    assert list(loaded.edges) == list(store.edges)
    assert loaded.get_node("inst").is_locked
    assert loaded.get_node("img").data.style == "anime"


@pytest.mark.asyncio
async def test_load_missing_graph(any_backend):
    assert await any_backend.load("nope") is None
    assert await load_store(any_backend, "nope") is None


@pytest.mark.asyncio
async def test_save_overwrites(any_backend):
    await any_backend.save("g", [text_node("a")], [])
    await any_backend.save("g", [text_node("b")], [])

    nodes, edges = await any_backend.load("g")

    assert [node.id for node in nodes] == ["b"]
    assert edges == []


@pytest.mark.asyncio
async def test_exists_list_and_delete(any_backend):
    await any_backend.save("g1", [text_node("a")], [])
    await any_backend.save("g2", [text_node("a")], [])
    await any_backend.save_speech_record(SpeechRecord(graph_id="g1", node_id="sp"))

    assert await any_backend.exists("g1")
    assert sorted(await any_backend.list_graphs()) == ["g1", "g2"]

    await any_backend.delete("g1")

    assert not await any_backend.exists("g1")
    assert await any_backend.list_graphs() == ["g2"]
    assert await any_backend.load_speech_record("g1", "sp") is None


@pytest.mark.asyncio
async def test_speech_record_upsert(any_backend):
    await any_backend.save_speech_record(
        SpeechRecord(graph_id="g", node_id="sp", speech_url="https://audio.test/1.mp3", speech_text="one")
    )
    await any_backend.save_speech_record(
        SpeechRecord(graph_id="g", node_id="sp", speech_url="https://audio.test/2.mp3", speech_text="two")
    )

    record = await any_backend.load_speech_record("g", "sp")

    assert record.speech_url == "https://audio.test/2.mp3"
    assert record.speech_text == "two"


@pytest.mark.asyncio
async def test_dangling_edges_survive_persistence(any_backend):
    await any_backend.save("g", [text_node("a")], [edge("a", "deleted")])

    store = await load_store(any_backend, "g")

    assert [e.target for e in store.edges] == ["deleted"]


def test_memory_clear_all():
    backend = MemoryBackend()
    backend._graphs["g"] = ((), ())

    backend.clear_all()

    assert repr(backend) == "MemoryBackend(graphs=0)"
