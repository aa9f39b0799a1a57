"""
Contract endpoints.
Stored content, block decomposition, re-hydration and PDF download.
"""

import logging
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import FileResponse

from app.api.deps import DbSession
from app.schemas.contract import (
    ContractResponse,
    ContractBlocksResponse,
    HydratedContractResponse,
)
from app.services.contract import ContractService, parse_content_blocks
from app.services.pdf import ContractPDFService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ContractResponse,
    summary="Contract of a quote",
)
async def get_contract_by_quote(
    db: DbSession,
    quote_id: int = Query(..., description="Quote the contract was generated from"),
) -> ContractResponse:
    contract = await ContractService(db).get_by_quote(quote_id)
    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract not found",
        )
    return ContractResponse.model_validate(contract)


@router.get(
    "/{contract_id}",
    response_model=ContractResponse,
    summary="Get a contract",
)
async def get_contract(
    contract_id: int,
    db: DbSession,
) -> ContractResponse:
    contract = await ContractService(db).get_or_404(contract_id)
    return ContractResponse.model_validate(contract)


@router.get(
    "/{contract_id}/blocks",
    response_model=ContractBlocksResponse,
    summary="Contract content blocks",
    description="Headings, paragraphs, rich text runs and lists for non-HTML renderers",
)
async def get_contract_blocks(
    contract_id: int,
    db: DbSession,
) -> ContractBlocksResponse:
    service = ContractService(db)
    contract = await service.get_or_404(contract_id)
    return ContractBlocksResponse(
        contract_id=contract.id,
        blocks=await service.blocks(contract),
    )


@router.get(
    "/{contract_id}/hydrated",
    response_model=HydratedContractResponse,
    summary="Re-hydrated contract",
    description="Contract content hydrated again against the current client, event and invoices",
)
async def get_hydrated_contract(
    contract_id: int,
    db: DbSession,
) -> HydratedContractResponse:
    service = ContractService(db)
    contract = await service.get_or_404(contract_id)
    return HydratedContractResponse(
        contract_id=contract.id,
        content=await service.hydrate(contract),
    )


@router.get(
    "/{contract_id}/pdf",
    summary="Download contract PDF",
)
async def download_contract_pdf(
    contract_id: int,
    db: DbSession,
) -> FileResponse:
    service = ContractService(db)
    contract = await service.get_or_404(contract_id)

    content = await service.hydrate(contract)
    filepath = ContractPDFService().render(contract, parse_content_blocks(content))
    logger.info(f"Contract PDF generated: {filepath}")

    return FileResponse(
        path=filepath,
        filename=f"contract_{contract.id}.pdf",
        media_type="application/pdf",
    )
