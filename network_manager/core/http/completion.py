"""
Completion contexts: where results are handed to caller continuations.

Every result of a call is delivered on the same context, whichever context
started the call.
"""

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

Completion = Callable[[Any], None]


class CompletionContext(ABC):

    @abstractmethod
    def dispatch(self, callback: Completion, result: Any) -> None:
        """Schedule callback(result) on this context."""
        pass


class EventLoopCompletionContext(CompletionContext):
    """
    Delivers results on an asyncio event loop.

    With an explicit loop every result goes to that loop. Without one, each
    result goes to the loop that is running when it is dispatched, which for
    NetworkManager is the loop the call was started on.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    def target_loop(self) -> asyncio.AbstractEventLoop:
        """Loop the next result will be scheduled on; a closed pinned loop is skipped."""
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        return asyncio.get_running_loop()

    def dispatch(self, callback: Completion, result: Any) -> None:
        self.target_loop().call_soon_threadsafe(callback, result)


class SerialExecutorCompletionContext(CompletionContext):
    """
    Delivers results one at a time on a dedicated worker thread.

    Useful for synchronous callers that want a single "main" thread for
    callbacks. Call shutdown() when done.
    """

    def __init__(self, thread_name_prefix: str = "network-completion"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name_prefix)

    def dispatch(self, callback: Completion, result: Any) -> Future:
        return self._executor.submit(callback, result)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
