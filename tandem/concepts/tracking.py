"""Tracking concept - goals with due dates."""
import logging
from datetime import datetime
from typing import Optional

from tandem.concepts.base import Concept
from tandem.models.goal import Goal, GoalStatus
from tandem.utils.dates import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


class TrackingConcept(Concept[Goal]):
    """Service for handling goal operations."""

    model = Goal
    collection_name = "goals"
    entity = "goal"
    owner_field = "executor"
    owner_role = "executor"
    statuses = GoalStatus

    async def create(
        self,
        executor: str,
        title: str,
        due: datetime,
        description: str = "",
    ) -> Goal:
        """
        Create a goal.

        A goal whose due date has already passed starts as "past due",
        otherwise as "pending".

        Args:
            executor: User working towards the goal
            title: Goal title
            due: Expected completion time
            description: Optional description

        Returns:
            Created goal
        """
        due = to_naive_utc(due)
        status = GoalStatus.PAST_DUE if due < utcnow() else GoalStatus.PENDING

        doc = await self.docs.create_one({
            "executor": executor,
            "title": title,
            "description": description,
            "status": status.value,
            "due": due,
        })
        return self._doc_to_record(doc)

    async def view_goals(self, executor: str) -> list[Goal]:
        docs = await self.docs.read_many({"executor": executor}, sort=[("due", 1)])
        return self._docs_to_records(docs)

    async def view_status(self, executor: str, status: str) -> list[Goal]:
        """
        Goals of ``executor`` currently in ``status``.

        Statuses are stored values; this does not recompute "past due".

        Raises:
            InvalidStatusError: If the status is unknown
        """
        await self.assert_valid_status(status)
        docs = await self.docs.read_many(
            {"executor": executor, "status": GoalStatus(status).value},
            sort=[("due", 1)],
        )
        return self._docs_to_records(docs)

    async def view_one_goal(self, goal_id: str) -> Optional[Goal]:
        return await self.read(goal_id)

    async def edit(
        self,
        goal_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        due: Optional[datetime] = None,
    ) -> Goal:
        """
        Update a goal. Omitted fields keep their value.

        Raises:
            InvalidStatusError: If the status is unknown
            NotFoundError: If the goal does not exist
        """
        await self.assert_valid_status(status)
        return await self._update(goal_id, {
            "title": title,
            "description": description,
            "status": GoalStatus(status).value if status is not None else None,
            "due": to_naive_utc(due) if due is not None else None,
        })

    async def assert_executor_is_user(self, goal_id: str, user: str) -> None:
        await self.assert_owner_is_user(goal_id, user)

    async def update_goal_statuses(self, now: Optional[datetime] = None) -> int:
        """
        Move every pending goal whose due date has passed to "past due".

        Each goal is written separately, so an interrupted sweep leaves the
        rest pending until the next run.

        Args:
            now: Reference time (defaults to the current time)

        Returns:
            Number of goals moved to "past due"
        """
        now = to_naive_utc(now) if now else utcnow()
        pending = await self.docs.read_many({"status": GoalStatus.PENDING.value})

        moved = 0
        for doc in pending:
            if doc["due"] >= now:
                continue
            updated = await self.docs.partial_update_one(
                {"_id": doc["_id"], "status": GoalStatus.PENDING.value},
                {"status": GoalStatus.PAST_DUE.value},
            )
            if updated is not None:
                moved += 1

        logger.info("Goal status sweep moved %d of %d pending goals to past due", moved, len(pending))
        return moved
