"""
Data Adapter for the Analytics Engine

Reads programs and students from MongoDB and transforms the raw
documents into the engine's contracts.

This is a READ + TRANSFORM layer:
- NO scoring logic
- NO aggregation
- the only write is the program metrics snapshot
"""

import logging
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId

from .contracts import ProgramMetricsSnapshot, ProgramRecord, StudentRecord

logger = logging.getLogger(__name__)


def _as_object_id(value: Any) -> Union[ObjectId, Any]:
    """ObjectId for 24-hex ids, the raw value otherwise."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return value


def _id_filter(value: Any) -> Dict[str, Any]:
    """Match either the ObjectId or its string form."""
    oid = _as_object_id(value)
    if isinstance(oid, ObjectId):
        return {"$in": [oid, str(oid)]}
    return {"$eq": value}


class ProgramStore:
    """Access to the `programs` and `students` collections."""

    def __init__(self, database):
        self.programs = database["programs"]
        self.students = database["students"]

    async def find_program(
        self,
        program_id: str,
        organization_id: str
    ) -> Optional[ProgramRecord]:
        doc = await self.programs.find_one({
            "_id": _id_filter(program_id),
            "organizationId": _id_filter(organization_id),
        })
        return ProgramRecord.model_validate(doc) if doc else None

    async def find_programs(self, organization_id: str) -> List[ProgramRecord]:
        cursor = self.programs.find({"organizationId": _id_filter(organization_id)})
        docs = await cursor.to_list(length=None)
        return [ProgramRecord.model_validate(d) for d in docs]

    async def find_program_students(self, program_id: str) -> List[StudentRecord]:
        cursor = self.students.find({"programIds": _id_filter(program_id)})
        docs = await cursor.to_list(length=None)
        logger.debug(f"Loaded {len(docs)} students for program {program_id}")
        return [StudentRecord.model_validate(d) for d in docs]

    async def find_organization_students(self, organization_id: str) -> List[StudentRecord]:
        cursor = self.students.find({"organizationId": _id_filter(organization_id)})
        docs = await cursor.to_list(length=None)
        return [StudentRecord.model_validate(d) for d in docs]

    async def find_program_student(
        self,
        student_id: str,
        program_id: str,
        organization_id: str
    ) -> Optional[StudentRecord]:
        doc = await self.students.find_one({
            "_id": _id_filter(student_id),
            "organizationId": _id_filter(organization_id),
            "programIds": _id_filter(program_id),
        })
        return StudentRecord.model_validate(doc) if doc else None

    async def update_program_metrics(
        self,
        program_id: str,
        snapshot: ProgramMetricsSnapshot
    ) -> None:
        await self.programs.update_one(
            {"_id": _id_filter(program_id)},
            {"$set": {"metrics": snapshot.model_dump(by_alias=True)}},
        )
        logger.info(f"💾 Metrics snapshot saved for program {program_id}")
