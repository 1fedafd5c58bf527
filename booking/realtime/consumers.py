import json

from channels.generic.websocket import AsyncWebsocketConsumer

from booking.auth import principal_for_user


def appointments_group(hospital_id: int) -> str:
    return f"hospital.{hospital_id}.appointments"


class HospitalAppointmentsConsumer(AsyncWebsocketConsumer):
    """Push appointment changes to the signed-in hospital's dashboard."""

    group_name = None

    async def connect(self):
        hospital_id = self.scope["url_route"]["kwargs"]["hospital_id"]
        principal = principal_for_user(self.scope.get("user"))
        if principal is None or principal.hospital_id != hospital_id:
            await self.close(code=4403)
            return
        self.group_name = appointments_group(hospital_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "hospitalId": hospital_id}))

    async def disconnect(self, close_code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def appointment_created(self, event):
        # event: {"type": "appointment.created", "appointment": {...}}
        await self.send(json.dumps(event))

    async def appointment_deleted(self, event):
        await self.send(json.dumps(event))

    async def directory_refresh(self, event):
        await self.send(json.dumps(event))
