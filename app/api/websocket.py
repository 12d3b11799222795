# app/api/websocket.py
import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.services.channel import channel

log = logging.getLogger(__name__)

router = APIRouter()


async def _forward(ws: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        await ws.send_json(await queue.get())


async def _until_disconnect(ws: WebSocket) -> None:
    # solo se lee para detectar el cierre del cliente
    try:
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        log.info("Presentation websocket disconnected")


@router.websocket("/ws")
async def presentation_ws(ws: WebSocket):
    # suscribir antes de aceptar: no se pierde nada publicado justo después del handshake
    queue = channel.subscribe()
    tasks: set[asyncio.Task] = set()
    try:
        await ws.accept()
        log.info("Presentation websocket connected (%d subscribers)", channel.subscriber_count)

        tasks = {asyncio.create_task(_forward(ws, queue)), asyncio.create_task(_until_disconnect(ws))}
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                log.error("Presentation websocket failed", exc_info=task.exception())
    finally:
        channel.unsubscribe(queue)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
