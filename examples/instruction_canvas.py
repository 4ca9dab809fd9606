"""Run an instruction node on a small canvas.

This example loads a saved canvas document, runs the instruction node
against the OpenAI services and prints the node it synthesized.
Requires OPENAI_API_KEY in the environment or a .env file.
"""

import asyncio

from easel import GraphExecutor, MemoryBackend, create_default_registry
from easel.parsers import ReactFlowParser
from easel.services.openai_services import create_openai_services
from easel.utils import load_env

# Load environment variables from .env file
load_env()

CANVAS = {
    "nodes": [
        {
            "id": "prompt",
            "type": "textEditor",
            "position": {"x": 0, "y": 0},
            "data": {"text": "A lighthouse on a cliff during a storm"},
        },
        {
            "id": "instruction",
            "type": "instruction",
            "position": {"x": 0, "y": 250},
            "data": {"text": "Turn this into a short poem"},
        },
    ],
    "edges": [
        {"id": "edge-prompt-instruction", "source": "prompt", "target": "instruction", "type": "default"},
    ],
}


async def main():
    print("=== Easel Instruction Example ===\n")

    store = ReactFlowParser().to_store(CANVAS, graph_id="example-canvas")
    backend = MemoryBackend()
    registry = create_default_registry(speech_records=backend, **create_openai_services())
    executor = GraphExecutor(registry)

    async def print_event(event):
        print(event.to_dict())

    executor.events.on(print_event)

    verdict = executor.evaluate(store, "instruction")
    print(f"Executable: {verdict.executable} {verdict.reason or ''}\n")

    outcome = await executor.run(store, "instruction")
    print(f"\nStatus: {outcome.status.value}")
    for node in outcome.created_nodes:
        print(f"Created {node.type} node {node.id} at ({node.position.x}, {node.position.y})")

    # Run the synthesized node so it fills in its content
    if outcome.ok and outcome.created_nodes:
        new_id = outcome.created_nodes[0].id
        result = await executor.run(store, new_id)
        print(f"Ran {new_id}: {result.status.value}")
        print(ReactFlowParser().dumps(store.snapshot()))


if __name__ == "__main__":
    asyncio.run(main())
