from ..common import CamelModel, ParticipantInfo, RoomWithParticipants


class JoinRoomResponse(CamelModel):
    room: RoomWithParticipants
    participant: ParticipantInfo
