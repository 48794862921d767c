"""Meeting room management service."""

from typing import Optional

import asyncpg
import structlog

from roomdesk.database import connection
from roomdesk.models.meeting_room import MeetingRoom
from roomdesk.services.errors import NotFoundFault, ValidationFault
from roomdesk.services.schedule_window import validate_window

logger = structlog.get_logger(__name__)

ROOM_NOT_FOUND_MESSAGE = "Meeting room not found"
ROOM_NAME_TAKEN_MESSAGE = "Meeting room name already exists"

_ROOM_COLUMNS = "id, name, open_time, close_time, slot_interval_minutes, created_at"


def _row_to_room(row) -> MeetingRoom:
    return MeetingRoom(
        id=row["id"],
        name=row["name"],
        open_time=row["open_time"],
        close_time=row["close_time"],
        slot_interval_minutes=row["slot_interval_minutes"],
        created_at=row["created_at"],
    )


class MeetingRoomService:
    """Service for meeting room CRUD.

    Every write checks the operating-hours window after merging the update
    over the stored values and before touching the database.
    """

    async def create_room(
        self,
        name: str,
        open_time: str,
        close_time: str,
        slot_interval_minutes: int,
    ) -> MeetingRoom:
        """Create a meeting room.

        Raises:
            ValidationFault: If the name is taken or open_time >= close_time
            StoreError: If the database fails
        """
        validate_window(open_time, close_time)
        if await self.name_taken(name):
            raise ValidationFault.for_field("name", ROOM_NAME_TAKEN_MESSAGE)

        async with connection() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO meeting_rooms (name, open_time, close_time, slot_interval_minutes)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {_ROOM_COLUMNS}
                    """,
                    name,
                    open_time,
                    close_time,
                    slot_interval_minutes,
                )
            except asyncpg.UniqueViolationError:
                logger.warning("meeting_room_name_conflict", name=name)
                raise ValidationFault.for_field("name", ROOM_NAME_TAKEN_MESSAGE)

        logger.info("meeting_room_created", room_id=row["id"], name=name)
        return _row_to_room(row)

    async def get_room(self, room_id: int) -> Optional[MeetingRoom]:
        """Get a meeting room by id, or None if not found."""
        async with connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {_ROOM_COLUMNS} FROM meeting_rooms WHERE id = $1",
                room_id,
            )
        return _row_to_room(row) if row is not None else None

    async def list_rooms(self) -> list[dict]:
        """List rooms as ``{id, name}``, newest first."""
        async with connection() as conn:
            rows = await conn.fetch(
                "SELECT id, name FROM meeting_rooms ORDER BY created_at DESC"
            )
        return [{"id": row["id"], "name": row["name"]} for row in rows]

    async def name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Check whether another room already uses ``name``."""
        async with connection() as conn:
            found = await conn.fetchval(
                """
                SELECT EXISTS(
                    SELECT 1 FROM meeting_rooms
                    WHERE name = $1 AND ($2::int IS NULL OR id <> $2)
                )
                """,
                name,
                exclude_id,
            )
        return bool(found)

    async def update_room(
        self,
        room_id: int,
        name: Optional[str] = None,
        open_time: Optional[str] = None,
        close_time: Optional[str] = None,
        slot_interval_minutes: Optional[int] = None,
    ) -> MeetingRoom:
        """Update the provided fields of a meeting room.

        Args:
            room_id: Room to update
            name: New name (if provided)
            open_time: New opening time (if provided)
            close_time: New closing time (if provided)
            slot_interval_minutes: New slot length (if provided)

        Returns:
            Updated MeetingRoom

        Raises:
            NotFoundFault: If the room does not exist
            ValidationFault: If the name is taken or the merged window is empty
            StoreError: If the database fails
        """
        existing = await self.get_room(room_id)
        if existing is None:
            raise NotFoundFault(ROOM_NOT_FOUND_MESSAGE)

        validate_window(open_time, close_time, existing)
        if name is not None and await self.name_taken(name, exclude_id=room_id):
            raise ValidationFault.for_field("name", ROOM_NAME_TAKEN_MESSAGE)

        # Build SET clause dynamically for non-None fields
        set_clauses = []
        params = []
        for column, value in (
            ("name", name),
            ("open_time", open_time),
            ("close_time", close_time),
            ("slot_interval_minutes", slot_interval_minutes),
        ):
            if value is not None:
                params.append(value)
                set_clauses.append(f"{column} = ${len(params)}")

        if not set_clauses:
            return existing

        set_clauses.append("updated_at = NOW()")
        params.append(room_id)

        query = f"""
            UPDATE meeting_rooms
            SET {', '.join(set_clauses)}
            WHERE id = ${len(params)}
            RETURNING {_ROOM_COLUMNS}
        """

        async with connection() as conn:
            try:
                row = await conn.fetchrow(query, *params)
            except asyncpg.UniqueViolationError:
                logger.warning("meeting_room_name_conflict", room_id=room_id, name=name)
                raise ValidationFault.for_field("name", ROOM_NAME_TAKEN_MESSAGE)

        if row is None:
            raise NotFoundFault(ROOM_NOT_FOUND_MESSAGE)

        logger.info(
            "meeting_room_updated",
            room_id=room_id,
            fields_updated=[c.split(" = ")[0] for c in set_clauses if "updated_at" not in c],
        )
        return _row_to_room(row)

    async def delete_room(self, room_id: int) -> None:
        """Delete a meeting room.

        Raises:
            NotFoundFault: If the room does not exist
            StoreError: If the database fails
        """
        async with connection() as conn:
            result = await conn.execute(
                "DELETE FROM meeting_rooms WHERE id = $1",
                room_id,
            )

        if result != "DELETE 1":
            logger.warning("meeting_room_delete_not_found", room_id=room_id)
            raise NotFoundFault(ROOM_NOT_FOUND_MESSAGE)

        logger.info("meeting_room_deleted", room_id=room_id)
