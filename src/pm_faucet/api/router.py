"""pm_faucet REST endpoint.

POST /faucet  {"address": "G..."}  — ask friendbot to fund a testnet account
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src.pm_common.response import ApiResponse, success_response
from src.pm_faucet.client import fund_account

router = APIRouter(prefix="/faucet", tags=["faucet"])


class FundRequest(BaseModel):
    address: str


@router.post("")
async def fund(body: FundRequest, request: Request) -> ApiResponse:
    await fund_account(body.address)
    resp = success_response({"address": body.address, "funded": True})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
