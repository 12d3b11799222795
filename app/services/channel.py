# app/services/channel.py
"""
Canal en tiempo real de presentaciones para los clientes web.

publish() no espera a nadie: deja el payload en la cola de cada suscriptor y
descarta a los que tienen la cola llena.
"""
import asyncio
import logging

log = logging.getLogger(__name__)


class PresentationChannel:
    def __init__(self, max_queue: int = 100):
        self._max_queue = max_queue
        self._subscribers: set[asyncio.Queue] = set()

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._max_queue)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        while not queue.empty():
            try:
                queue.get_nowait()
            except asyncio.QueueEmpty:
                break

    def publish(self, payload: dict) -> int:
        """Devuelve el número de suscriptores que recibieron el payload."""
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(payload)
                delivered += 1
            except asyncio.QueueFull:
                log.warning("Presentation subscriber queue full, dropping subscriber")
                self._subscribers.discard(queue)
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


channel = PresentationChannel()
