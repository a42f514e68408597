"""
Debounced preview scheduling with latest-request-wins semantics.
"""

# Standard Library
import threading
import typing

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.config


PREVIEW_DEBOUNCE_SECONDS = qcm.config.PREVIEW_DEBOUNCE_SECONDS


class PreviewScheduler:
	"""
	Replacement queue of depth one for preview renders.

	Each request supersedes the pending one. A request only renders after
	the debounce window passes without a newer request, and a render whose
	generation went stale while it ran is discarded instead of delivered.
	"""

	def __init__(
		self,
		render_fn: typing.Callable[..., typing.Any],
		deliver_fn: typing.Callable[[typing.Any], None],
		debounce_seconds: float = PREVIEW_DEBOUNCE_SECONDS,
		timer_factory: typing.Callable[..., typing.Any] = threading.Timer,
	):
		self.render_fn = render_fn
		self.deliver_fn = deliver_fn
		self.debounce_seconds = debounce_seconds
		self.timer_factory = timer_factory
		self.generation = 0
		self.pending = None
		self.lock = threading.Lock()

	def request(self, *args) -> int:
		"""
		Schedule a render with the given arguments.

		Returns:
			Generation number of this request.
		"""
		with self.lock:
			self.generation += 1
			generation = self.generation
			if self.pending is not None:
				self.pending.cancel()
			timer = self.timer_factory(self.debounce_seconds, self.run, args=(generation, args))
			timer.daemon = True
			self.pending = timer
		timer.start()
		return generation

	def is_current(self, generation: int) -> bool:
		with self.lock:
			return generation == self.generation

	def run(self, generation: int, args: tuple) -> None:
		with self.lock:
			if generation != self.generation:
				return
			self.pending = None
		result = self.render_fn(*args)
		if not self.is_current(generation):
			return
		self.deliver_fn(result)

	def cancel(self) -> None:
		"""
		Drop the pending request and invalidate any render in flight.
		"""
		with self.lock:
			self.generation += 1
			if self.pending is not None:
				self.pending.cancel()
				self.pending = None
