"""
Test configuration and fixtures
"""
import sys
from pathlib import Path

# Add src to Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"

sys.path.insert(0, str(src_path))

import pytest

from julia_nft.core.config import CollectionConfig, RenderConfig
from julia_nft.core.contracts.events import RecordingEventSink
from julia_nft.core.contracts.julia import JuliaCollection
from julia_nft.core.host import HostContext

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20
CAROL = "0x" + "c3" * 20
DAVE = "0x" + "d4" * 20
ZERO = "0x" + "0" * 40

SMALL_RENDER = RenderConfig(width=24, height=24, max_iterations=40)


@pytest.fixture
def context():
    return HostContext(caller=ALICE)


@pytest.fixture
def sink():
    return RecordingEventSink()


@pytest.fixture
def collection(context, sink):
    """Julia collection with a tiny canvas so artwork renders quickly."""
    return JuliaCollection(
        config=CollectionConfig(name="Julia", symbol="JUL"),
        context=context,
        sink=sink,
        render_config=SMALL_RENDER,
    )
