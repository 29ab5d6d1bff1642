import asyncio
import typing


CallbackType = typing.Callable[..., typing.Any]


class EventEmitter:

	"""
	Named notifications for display collaborators.

	State changes happen synchronously, so ``emit`` calls plain listeners in
	registration order. Async listeners are started as tasks on the running
	loop and are not awaited.
	"""

	def __init__ (self) -> None:

		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {}
		self._tasks: typing.Set[asyncio.Task] = set()


	def on (self, event_name: str, callback: CallbackType) -> None:

		"""
		Register a callback for an event name.
		"""

		self._listeners.setdefault(event_name, []).append(callback)


	def off (self, event_name: str, callback: CallbackType) -> None:

		"""
		Unregister a previously registered callback.

		Raises ``ValueError`` if the callback is not registered for the event.
		"""

		if callback not in self._listeners.get(event_name, []):
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)


	def emit (self, event_name: str, *args: typing.Any, **kwargs: typing.Any) -> None:

		"""
		Notify every listener of an event.

		Raises ``RuntimeError`` if an async listener is registered and no loop is running.
		"""

		for callback in list(self._listeners.get(event_name, [])):

			if asyncio.iscoroutinefunction(callback):
				task = asyncio.get_running_loop().create_task(callback(*args, **kwargs))
				self._tasks.add(task)
				task.add_done_callback(self._tasks.discard)

			else:
				callback(*args, **kwargs)
