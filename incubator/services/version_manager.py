"""
Point-in-time snapshots of ideas and restoration from them
"""
from typing import Dict, List, Optional, Sequence

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import (
    Answer,
    AnswerSnapshot,
    Idea,
    IdeaVersion,
    IdeaVersionCreate,
    Question,
)
from incubator.storage import Storage


class VersionManager:
    """Creates immutable idea versions and restores ideas to earlier ones"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def snapshot_answers(self, idea_id: int) -> List[AnswerSnapshot]:
        """
        Capture the idea's current answers with their question text

        Answers whose question no longer exists are left out.
        """
        snapshot = []
        for answer in await self.storage.list_answers(idea_id):
            question = await self.storage.get_question(answer.question_id)
            if question is None:
                logger.debug(f"Skipping answer {answer.id}: question {answer.question_id} is gone")
                continue
            snapshot.append(AnswerSnapshot(
                question_id=answer.question_id,
                question_text=question.text,
                answer_text=answer.text,
            ))
        return snapshot

    async def create_version(
        self,
        idea_id: int,
        title: str,
        description: str,
        answers_snapshot: Sequence[AnswerSnapshot],
    ) -> IdeaVersion:
        version = await self.storage.create_version(IdeaVersion(
            idea_id=idea_id,
            title=title,
            description=description,
            answers_snapshot=[entry.model_dump() for entry in answers_snapshot],
        ))
        logger.info(f"Created version {version.id} for idea {idea_id} with {len(answers_snapshot)} answers")
        return version

    async def snapshot_idea(self, idea: Idea) -> IdeaVersion:
        """Record the idea's current title, description and answers"""
        answers_snapshot = await self.snapshot_answers(idea.id)
        return await self.create_version(idea.id, idea.title, idea.description, answers_snapshot)

    async def record_version(self, payload: IdeaVersionCreate) -> IdeaVersion:
        """Store an explicitly supplied snapshot for an existing idea"""
        if await self.storage.get_idea(payload.idea_id) is None:
            raise NotFoundError("Idea", payload.idea_id)
        return await self.create_version(
            payload.idea_id, payload.title, payload.description, payload.answers_snapshot
        )

    async def list_versions(self, idea_id: int) -> List[IdeaVersion]:
        if await self.storage.get_idea(idea_id) is None:
            raise NotFoundError("Idea", idea_id)
        return await self.storage.list_versions(idea_id)

    async def resolve_by_id(self, entry: AnswerSnapshot) -> Optional[Question]:
        return await self.storage.get_question(entry.question_id)

    async def resolve_by_text(self, entry: AnswerSnapshot) -> Optional[Question]:
        """
        Legacy compatibility: question ids may have been reassigned since the
        snapshot was taken (e.g. after a reseed), so match on the stored text.
        """
        return await self.storage.get_question_by_text(entry.question_text)

    async def resolve_question(self, entry: AnswerSnapshot) -> Optional[Question]:
        question = await self.resolve_by_id(entry)
        if question is None:
            question = await self.resolve_by_text(entry)
            if question is not None:
                logger.info(
                    f"Snapshot question {entry.question_id} matched by text to question {question.id}"
                )
        return question

    async def restore(self, idea_id: int, version_id: int) -> Idea:
        """
        Restore an idea to a stored version

        Title and description are overwritten, status is kept. Snapshot
        answers overwrite or add answers for their questions; answers to
        questions absent from the snapshot are left as they are, and snapshot
        entries whose question cannot be resolved are dropped. The restored
        state is recorded as a new version. Everything happens in one
        transaction.

        Args:
            idea_id: Idea to restore
            version_id: Version of that idea to restore from

        Returns:
            The restored idea
        """
        async with self.storage.transaction():
            idea = await self.storage.get_idea(idea_id)
            if idea is None:
                raise NotFoundError("Idea", idea_id)

            version = await self.storage.get_version(version_id)
            if version is None or version.idea_id != idea_id:
                raise NotFoundError("Version", version_id)

            restored = await self.storage.update_idea(idea_id, {
                "title": version.title,
                "description": version.description,
            })

            answers_by_question: Dict[int, Answer] = {
                answer.question_id: answer for answer in await self.storage.list_answers(idea_id)
            }
            dropped = 0
            for entry in version.snapshot_entries():
                question = await self.resolve_question(entry)
                if question is None:
                    dropped += 1
                    continue

                existing = answers_by_question.get(question.id)
                if existing is not None:
                    answers_by_question[question.id] = await self.storage.update_answer(
                        existing.id, {"text": entry.answer_text}
                    )
                else:
                    answers_by_question[question.id] = await self.storage.create_answer(Answer(
                        idea_id=idea_id,
                        question_id=question.id,
                        text=entry.answer_text,
                    ))

            await self.snapshot_idea(restored)

        logger.info(
            f"Restored idea {idea_id} to version {version_id}"
            + (f", {dropped} unresolved answers dropped" if dropped else "")
        )
        return restored
