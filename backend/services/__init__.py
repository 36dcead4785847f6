from .room_store import InvalidOffer, RoomRegistry, RoomStore, SessionNotFound, rooms

__all__ = ["rooms", "RoomRegistry", "RoomStore", "InvalidOffer", "SessionNotFound"]
