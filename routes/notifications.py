import logging
from fastapi import WebSocket, WebSocketDisconnect, APIRouter
from typing import List
from schemas.order_management import OrderInDB

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/notifications", tags=["notifications"])


class ConnectionManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.debug(f"WebSocket connected. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.debug(f"WebSocket disconnected. Total connections: {len(self.active_connections)}")

    async def broadcast(self, message: dict):
        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to send WebSocket message: {str(e)}")
                self.disconnect(connection)


connection_manager = ConnectionManager()


async def notify_order_status_update(order: OrderInDB):
    data = {"id": order.id, "status": order.status.value, "tableNumber": order.table_number}
    logger.debug(f"Sending order status update: {data}")
    try:
        await connection_manager.broadcast(data)
    except Exception as e:
        logger.warning(f"Failed to broadcast order status update for order {order.id}: {str(e)}")


@router.websocket("/ws")
async def websocket_notifications(websocket: WebSocket):
    await connection_manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        connection_manager.disconnect(websocket)
    except Exception as e:
        logger.error(f"WebSocket error: {str(e)}")
        connection_manager.disconnect(websocket)
