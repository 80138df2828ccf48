# application/services/fine_tuning_service.py

from typing import Optional

from domain.contracts.i_openai_client import IOpenAIClient
from domain.entities.fine_tuning import (
    CreateFineTuningJobRequest,
    FineTuningJob,
    ListFineTuningJobEventsResponse,
    ListPaginatedFineTuningJobsResponse,
)


class FineTuning:
    """Fine-tuning jobs: `/fine_tuning/jobs`."""

    def __init__(self, client: IOpenAIClient):
        self.client = client

    async def create(self, request: CreateFineTuningJobRequest) -> FineTuningJob:
        """
        Creates a job that fine-tunes a model from an uploaded training file.

        The response carries the job status; poll `retrieve` or `list_events`
        for progress.
        """
        return await self.client.post("/fine_tuning/jobs", request, FineTuningJob)

    async def list_paginated(
        self, after: Optional[str] = None, limit: Optional[int] = None
    ) -> ListPaginatedFineTuningJobsResponse:
        return await self.client.get_with_query(
            "/fine_tuning/jobs",
            {"after": after, "limit": limit},
            ListPaginatedFineTuningJobsResponse,
        )

    async def retrieve(self, fine_tuning_job_id: str) -> FineTuningJob:
        return await self.client.get(f"/fine_tuning/jobs/{fine_tuning_job_id}", FineTuningJob)

    async def cancel(self, fine_tuning_job_id: str) -> FineTuningJob:
        return await self.client.post(
            f"/fine_tuning/jobs/{fine_tuning_job_id}/cancel", {}, FineTuningJob
        )

    async def list_events(
        self, fine_tuning_job_id: str, after: Optional[str] = None, limit: Optional[int] = None
    ) -> ListFineTuningJobEventsResponse:
        return await self.client.get_with_query(
            f"/fine_tuning/jobs/{fine_tuning_job_id}/events",
            {"after": after, "limit": limit},
            ListFineTuningJobEventsResponse,
        )
