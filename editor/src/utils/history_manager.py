"""
Undo/Redo History Manager for CSS Shapes Studio

Keeps a linear log of full canvas snapshots with a cursor.
Every stored and returned snapshot is an independent deep copy.
"""

import copy
import logging

from constants import MAX_HISTORY_ENTRIES


class HistoryManager:
	"""Manages undo/redo history with state snapshots"""

	def __init__(self, max_history=MAX_HISTORY_ENTRIES):
		"""
		Initialize the history manager

		Args:
			max_history: Maximum number of states to keep, None for unbounded
		"""
		if max_history is not None and max_history < 1:
			raise ValueError(f"max_history must be positive or None, got {max_history}")
		self.max_history = max_history
		self.history = []  # List of state snapshots
		self.current_index = -1  # Current position in history (-1 means no states)
		self._listeners = []  # Callbacks to notify on state changes
		self._logger = logging.getLogger('HistoryManager')

	def save_state(self, state_data, description=""):
		"""
		Save a new state to history

		Args:
			state_data: The full state to save (deep copied)
			description: Optional description of the change
		"""
		# Abandon the redo branch
		if self.current_index < len(self.history) - 1:
			self.history = self.history[:self.current_index + 1]

		snapshot = {
			'data': copy.deepcopy(state_data),
			'description': description
		}

		self.history.append(snapshot)
		self.current_index += 1

		if self.max_history is not None and len(self.history) > self.max_history:
			self.history.pop(0)
			self.current_index -= 1

		self._notify_listeners()

		self._logger.debug(f"State saved: {description} (index: {self.current_index}, total: {len(self.history)})")

	def record(self, state_data, description=""):
		"""Alias of save_state"""
		self.save_state(state_data, description)

	def undo(self):
		"""
		Move back one state in history

		Returns:
			Fresh copy of the previous state, or None if at beginning
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - at beginning of history")
			return None

		self.current_index -= 1
		entry = self.history[self.current_index]

		self._notify_listeners()

		self._logger.debug(f"Undo to: {entry['description']} (index: {self.current_index})")
		return copy.deepcopy(entry['data'])

	def redo(self):
		"""
		Move forward one state in history

		Returns:
			Fresh copy of the next state, or None if at end
		"""
		if not self.can_redo():
			self._logger.debug("Cannot redo - at end of history")
			return None

		self.current_index += 1
		entry = self.history[self.current_index]

		self._notify_listeners()

		self._logger.debug(f"Redo to: {entry['description']} (index: {self.current_index})")
		return copy.deepcopy(entry['data'])

	def current_state(self):
		"""Fresh copy of the state at the cursor, or None when empty"""
		if 0 <= self.current_index < len(self.history):
			return copy.deepcopy(self.history[self.current_index]['data'])
		return None

	def can_undo(self):
		"""Check if undo is available"""
		return self.current_index > 0

	def can_redo(self):
		"""Check if redo is available"""
		return self.current_index < len(self.history) - 1

	def clear(self):
		"""Clear all history"""
		self.history = []
		self.current_index = -1
		self._notify_listeners()
		self._logger.debug("History cleared")

	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes

		Args:
			callback: Function to call when history changes (receives can_undo, can_redo)
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception:
				self._logger.exception("Error notifying history listener")

	def get_current_description(self):
		"""Get the description of the current state"""
		if 0 <= self.current_index < len(self.history):
			return self.history[self.current_index]['description']
		return ""

	def get_undo_description(self):
		"""Get the description of the state that would be restored by undo"""
		if self.can_undo():
			return self.history[self.current_index - 1]['description']
		return ""

	def get_redo_description(self):
		"""Get the description of the state that would be restored by redo"""
		if self.can_redo():
			return self.history[self.current_index + 1]['description']
		return ""
