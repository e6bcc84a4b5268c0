from fastapi import APIRouter, HTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from saathi.models.calculator import CalculatorState, EvaluateRequest, EvaluateResponse, PressRequest
from saathi.services.calculator import evaluate_expression, press

router = APIRouter(prefix="/v1/calculator", tags=["calculator"])


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(body: EvaluateRequest):
    return EvaluateResponse(
        expression=body.expression,
        result=evaluate_expression(body.expression, body.angleMode),
    )


@router.post("/press", response_model=CalculatorState)
def press_key(body: PressRequest):
    try:
        return press(body.state, body.key)
    except ValueError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e))
