from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass(slots=True)
class SettleTimer:
	"""One-shot countdown driven by frame ticks.

	``schedule`` arms the timer with a delay and a continuation; ``advance`` adds
	elapsed time and fires the continuation exactly once when the delay has fully
	elapsed. Only one continuation can be pending at a time.

	"""

	_remaining: float = field(init=False, default=0.0, repr=False)
	_callback: Callable[[], None] | None = field(init=False, default=None, repr=False)
	_fired: int = field(init=False, default=0, repr=False)

	@property
	def pending(self) -> bool:
		return self._callback is not None

	@property
	def remaining(self) -> float:
		return self._remaining if self._callback is not None else 0.0

	@property
	def fired(self) -> int:
		return self._fired

	def schedule(self, delay: float, callback: Callable[[], None]) -> None:
		if self._callback is not None:
			raise RuntimeError("Settle timer already has a pending continuation")
		self._remaining = max(0.0, float(delay))
		self._callback = callback

	def advance(self, dt: float) -> bool:
		"""Consume dt seconds; returns True if the continuation ran on this call."""
		if self._callback is None:
			return False
		self._remaining -= max(0.0, float(dt))
		if self._remaining > 0.0:
			return False
		callback = self._callback
		self._callback = None
		self._remaining = 0.0
		self._fired += 1
		callback()
		return True

	def reset(self) -> None:
		self._callback = None
		self._remaining = 0.0
