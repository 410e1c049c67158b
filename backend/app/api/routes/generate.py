import logging
from typing import Any

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from app import crud
from app.agent.artifacts import (
    BoltPromptRequest,
    MockupRequest,
    QuoteRequest,
    StatementOfWorkRequest,
    UILayoutRequest,
)
from app.agent.bolt_prompt_agent import BoltPromptAgent
from app.agent.mockup_agent import MockupHTMLAgent
from app.agent.quote_agent import QuoteAgent
from app.agent.statement_of_work_agent import StatementOfWorkAgent
from app.agent.ui_layout_agent import UILayoutAgent
from app.api.deps import DbDep, LLMDep, MockupPublisherDep, SettingsDep
from app.core.errors import failure_envelope
from app.models import MockupGenerated

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generateQuote")
async def generate_quote(payload: QuoteRequest, llm: LLMDep) -> dict[str, Any]:
    with failure_envelope("Failed to generate quote"):
        result = await QuoteAgent(llm).run(payload)
    return {"success": True, "data": result.data, "metadata": result.metadata()}


@router.post("/generateStatementOfWork")
async def generate_statement_of_work(payload: StatementOfWorkRequest, llm: LLMDep) -> dict[str, Any]:
    with failure_envelope("Failed to generate statement of work"):
        result = await StatementOfWorkAgent(llm).run(payload)
    return {"success": True, "data": result.data, "metadata": result.metadata()}


@router.post("/generateBoltPrompt")
async def generate_bolt_prompt(payload: BoltPromptRequest, llm: LLMDep) -> dict[str, Any]:
    with failure_envelope("Failed to generate Bolt.New prompt"):
        result = await BoltPromptAgent(llm).run(payload)
    quote = payload.quote_response
    return {
        "success": True,
        "data": {
            "prompt": result.text,
            "metadata": {
                "generatedAt": result.generated_at.isoformat(),
                "model": result.model,
                "companyName": payload.company_name,
                "featuresCount": len(quote.scope_of_work),
                "estimatedCost": quote.total_estimated_cost,
            },
        },
    }


@router.post("/generateUILayout")
async def generate_ui_layout(payload: UILayoutRequest, llm: LLMDep, db: DbDep) -> dict[str, Any]:
    with failure_envelope("Failed to generate UI layout"):
        result = await UILayoutAgent(llm).run(payload)
        if payload.quote_id:
            await run_in_threadpool(
                lambda: crud.save_ui_layout(db=db, quote_id=payload.quote_id, layout=result.data)
            )
    components = result.data.get("Components")
    logger.info(
        "UI Layout generated successfully for quote %s: %s components",
        payload.quote_id,
        len(components) if isinstance(components, list) else 0,
    )
    return {"success": True, "uiLayout": result.data, "metadata": result.metadata()}


@router.post("/generateMockup", response_model=MockupGenerated)
async def generate_mockup(
    payload: MockupRequest,
    llm: LLMDep,
    db: DbDep,
    publisher: MockupPublisherDep,
    config: SettingsDep,
) -> Any:
    with failure_envelope("Failed to generate mockup"):
        page = await MockupHTMLAgent(llm, config.MOCKUP_TEMPLATE_PATH).run(payload)
        mockup_url = await publisher.publish(page.text, company_name=payload.company_name, quote_id=payload.quote_id)
        await run_in_threadpool(
            lambda: crud.save_mockup(db=db, quote_id=payload.quote_id, mockup_url=mockup_url, mockup_html=page.text)
        )
    return MockupGenerated(mockup_url=mockup_url)
