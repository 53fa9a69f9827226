"""
Shared fixtures for CSS Shapes Studio tests.

Provides sample shape records, ready-made sessions and a temporary creation store.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widgets are created headless
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Sample shape records ────────────────────────────────────────────────

RECTANGLE_RECORD = {
    'id': 'rect-1',
    'type': 'rectangle',
    'x': 10,
    'y': 10,
    'width': 80,
    'height': 50,
    'color': '#004aad',
    'opacity': 100,
    'rotation': 0,
    'flipX': False,
    'flipY': False,
    'borderRadius': 0,
}

STAR_RECORD = {
    'id': 'star-1',
    'type': 'star',
    'x': 200,
    'y': 100,
    'width': 80,
    'height': 80,
    'color': '#ff0000',
    'opacity': 50,
    'rotation': 0,
    'flipX': False,
    'flipY': False,
    'curve': 0,
}

TEXT_RECORD = {
    'id': 'text-1',
    'type': 'text',
    'x': 300,
    'y': 300,
    'width': 150,
    'height': 40,
    'color': '#222222',
    'opacity': 100,
    'rotation': 0,
    'flipX': False,
    'flipY': False,
    'text': 'Hello <World> & co',
    'fontSize': 24,
    'fontFamily': 'Arial',
    'fontWeight': 'bold',
    'fontStyle': 'normal',
    'textAlign': 'right',
}


@pytest.fixture
def rectangle_record():
    """Plain 80x50 rectangle at (10, 10)"""
    return dict(RECTANGLE_RECORD)


@pytest.fixture
def sample_records():
    """Rectangle, star and text records in z-order"""
    return [dict(RECTANGLE_RECORD), dict(STAR_RECORD), dict(TEXT_RECORD)]


@pytest.fixture
def notifications():
    """List collecting (message, kind) pairs from a session's notify sink"""
    return []


@pytest.fixture
def session(notifications):
    """Fresh empty session on a 600x400 canvas"""
    from services.editor_session import EditorSession
    return EditorSession(notify=lambda message, kind: notifications.append((message, kind)))


@pytest.fixture
def loaded_session(sample_records, notifications):
    """Session started from the sample records"""
    from services.editor_session import EditorSession
    return EditorSession(initial_shapes=sample_records,
                         notify=lambda message, kind: notifications.append((message, kind)))


@pytest.fixture
def store(tmp_path):
    """Creation store backed by a temp file"""
    from services.creation_store import CreationStore
    return CreationStore(path=str(tmp_path / 'creations.json'))
