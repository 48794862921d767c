"""Booking management service.

Bookings are stored as given: no overlap check is made against other
bookings for the same room.
"""

from datetime import datetime
from typing import Optional

import structlog

from roomdesk.database import connection
from roomdesk.models.booking import Booking
from roomdesk.services.errors import NotFoundFault, ValidationFault

logger = structlog.get_logger(__name__)

BOOKING_NOT_FOUND_MESSAGE = "Booking not found"
ROOM_NOT_FOUND_MESSAGE = "Meeting room not found"

_BOOKING_COLUMNS = "id, name, purpose, user_id, meeting_room_id, start_time, end_time, created_at"


def _row_to_booking(row) -> Booking:
    return Booking(
        id=row["id"],
        name=row["name"],
        purpose=row["purpose"],
        user_id=row["user_id"],
        meeting_room_id=row["meeting_room_id"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        created_at=row["created_at"],
    )


class BookingService:
    """Service for booking CRUD scoped to the owning user."""

    async def _require_room(self, conn, meeting_room_id: int) -> None:
        exists = await conn.fetchval(
            "SELECT EXISTS(SELECT 1 FROM meeting_rooms WHERE id = $1)",
            meeting_room_id,
        )
        if not exists:
            raise ValidationFault.for_field("meeting_room_id", ROOM_NOT_FOUND_MESSAGE)

    async def create_booking(
        self,
        user_id: int,
        name: str,
        meeting_room_id: int,
        start_time: datetime,
        end_time: datetime,
        purpose: str,
    ) -> Booking:
        """Create a booking for ``user_id``.

        Raises:
            ValidationFault: If the meeting room does not exist
            StoreError: If the database fails
        """
        async with connection() as conn:
            await self._require_room(conn, meeting_room_id)
            row = await conn.fetchrow(
                f"""
                INSERT INTO bookings (name, purpose, user_id, meeting_room_id, start_time, end_time)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {_BOOKING_COLUMNS}
                """,
                name,
                purpose,
                user_id,
                meeting_room_id,
                start_time,
                end_time,
            )

        logger.info(
            "booking_created",
            booking_id=row["id"],
            user_id=user_id,
            meeting_room_id=meeting_room_id,
        )
        return _row_to_booking(row)

    async def list_bookings(self) -> list[dict]:
        """List every booking's room and time range, newest first."""
        async with connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, meeting_room_id, start_time, end_time
                FROM bookings
                ORDER BY created_at DESC
                """
            )
        return [
            {
                "id": row["id"],
                "meeting_room_id": row["meeting_room_id"],
                "start_time": row["start_time"],
                "end_time": row["end_time"],
            }
            for row in rows
        ]

    async def list_user_bookings(self, user_id: int) -> list[dict]:
        """List a user's bookings with the room name, newest first."""
        async with connection() as conn:
            rows = await conn.fetch(
                """
                SELECT b.id, b.name, b.purpose, b.start_time, b.end_time,
                       r.name AS meeting_room_name
                FROM bookings b
                JOIN meeting_rooms r ON r.id = b.meeting_room_id
                WHERE b.user_id = $1
                ORDER BY b.created_at DESC
                """,
                user_id,
            )
        return [
            {
                "id": row["id"],
                "name": row["name"],
                "meeting_room_name": row["meeting_room_name"],
                "purpose": row["purpose"],
                "start_time": row["start_time"],
                "end_time": row["end_time"],
            }
            for row in rows
        ]

    async def update_booking(
        self,
        user_id: int,
        booking_id: int,
        name: Optional[str] = None,
        meeting_room_id: Optional[int] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        purpose: Optional[str] = None,
    ) -> Booking:
        """Update the provided fields of one of the user's bookings.

        Raises:
            NotFoundFault: If the booking does not exist or belongs to someone else
            ValidationFault: If the new meeting room does not exist
            StoreError: If the database fails
        """
        set_clauses = []
        params = []
        for column, value in (
            ("name", name),
            ("meeting_room_id", meeting_room_id),
            ("start_time", start_time),
            ("end_time", end_time),
            ("purpose", purpose),
        ):
            if value is not None:
                params.append(value)
                set_clauses.append(f"{column} = ${len(params)}")

        set_clauses.append("updated_at = NOW()")
        params.extend([booking_id, user_id])

        query = f"""
            UPDATE bookings
            SET {', '.join(set_clauses)}
            WHERE id = ${len(params) - 1} AND user_id = ${len(params)}
            RETURNING {_BOOKING_COLUMNS}
        """

        async with connection() as conn:
            if meeting_room_id is not None:
                # Ownership first: non-owners get 404 whatever room they name
                owned = await conn.fetchval(
                    "SELECT EXISTS(SELECT 1 FROM bookings WHERE id = $1 AND user_id = $2)",
                    booking_id,
                    user_id,
                )
                if not owned:
                    raise NotFoundFault(BOOKING_NOT_FOUND_MESSAGE)
                await self._require_room(conn, meeting_room_id)
            row = await conn.fetchrow(query, *params)

        if row is None:
            raise NotFoundFault(BOOKING_NOT_FOUND_MESSAGE)

        logger.info("booking_updated", booking_id=booking_id, user_id=user_id)
        return _row_to_booking(row)

    async def delete_booking(self, user_id: int, booking_id: int) -> None:
        """Delete one of the user's bookings.

        Raises:
            NotFoundFault: If the booking does not exist or belongs to someone else
            StoreError: If the database fails
        """
        async with connection() as conn:
            result = await conn.execute(
                "DELETE FROM bookings WHERE id = $1 AND user_id = $2",
                booking_id,
                user_id,
            )

        if result != "DELETE 1":
            raise NotFoundFault(BOOKING_NOT_FOUND_MESSAGE)

        logger.info("booking_deleted", booking_id=booking_id, user_id=user_id)
