"""
CSS Shapes Studio - Creation Store Service

JSON file persistence for saved creations. A creation is a named list of
shape records exactly as EditorSession.get_snapshot() returns them; the
records are stored and reloaded verbatim.

File layout:
    {
      "version": 1,
      "creations": [
        {"id": "...", "name": "Logo", "shapes": [{...}, {...}]}
      ]
    }

The editor core never calls this module; the host wires it in through the
commit strategies at the bottom.
"""

import os
import json
import copy
import logging
import uuid as uuid_module

from constants import NOTIFY_SUCCESS

STORE_VERSION = 1
DEFAULT_STORE_DIR = os.path.join(os.path.expanduser('~'), '.css_shapes_studio')
DEFAULT_STORE_FILE = os.path.join(DEFAULT_STORE_DIR, 'creations.json')


class CreationStore:
    """Saved creations backed by a single JSON file"""

    def __init__(self, path=DEFAULT_STORE_FILE):
        self.path = path
        self._logger = logging.getLogger('CreationStore')
        self._creations = self._read()

    def _read(self):
        """Load creations from disk, an absent file means an empty store"""
        if not os.path.exists(self.path):
            return []
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        creations = data.get('creations', []) if isinstance(data, dict) else []
        self._logger.debug(f"Loaded {len(creations)} creation(s) from {self.path}")
        return creations

    def _write(self):
        """Write every creation back to disk"""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'version': STORE_VERSION, 'creations': self._creations}, f, indent=2)

    def _find(self, creation_id):
        for creation in self._creations:
            if creation['id'] == creation_id:
                return creation
        raise KeyError(f"No creation with id {creation_id!r}")

    def list(self):
        """Copies of all creations in save order"""
        return copy.deepcopy(self._creations)

    def get(self, creation_id):
        """Copy of one creation

        Raises:
            KeyError: If the id is unknown
        """
        return copy.deepcopy(self._find(creation_id))

    def save_new(self, name, shapes):
        """Store shapes as a new creation

        Returns:
            The new creation dict
        """
        creation = {
            'id': uuid_module.uuid4().hex,
            'name': name or 'Custom Creation',
            'shapes': copy.deepcopy(list(shapes)),
        }
        self._creations.append(creation)
        self._write()
        self._logger.debug(f"Saved new creation {creation['name']!r}")
        return copy.deepcopy(creation)

    def overwrite(self, creation_id, shapes):
        """Replace the shapes of an existing creation

        Raises:
            KeyError: If the id is unknown
        """
        creation = self._find(creation_id)
        creation['shapes'] = copy.deepcopy(list(shapes))
        self._write()
        return copy.deepcopy(creation)

    def rename(self, creation_id, name):
        creation = self._find(creation_id)
        creation['name'] = name
        self._write()
        return copy.deepcopy(creation)

    def delete(self, creation_id):
        creation = self._find(creation_id)
        self._creations.remove(creation)
        self._write()


# ========================================
# Commit strategies for EditorSession
# ========================================

def save_as_new_strategy(store, name, notify=None):
    """Commit action that saves the session's shapes as a new creation"""
    def _commit(records):
        creation = store.save_new(name, records)
        if notify is not None:
            notify(f'"{creation["name"]}" saved as new item', NOTIFY_SUCCESS)
        return creation
    return _commit


def overwrite_strategy(store, creation_id, notify=None):
    """Commit action that overwrites an existing creation in place"""
    def _commit(records):
        creation = store.overwrite(creation_id, records)
        if notify is not None:
            notify(f'"{creation["name"]}" updated', NOTIFY_SUCCESS)
        return creation
    return _commit
