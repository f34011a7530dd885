from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from graphcompose.composition import operators
from graphcompose.config.settings import CompositionConfig
from graphcompose.mapping import parse_relationship
from graphcompose.persistence import from_dict, to_dict

from backend.app.api.schemas import ComposeRequest, GraphPayload
from backend.app.dependencies import get_composition_config

router = APIRouter()


class Operator(str, Enum):
    then = "then"
    parallel = "parallel"
    choice = "choice"
    compose = "compose"


@router.post("/{operator}", response_model=GraphPayload)
def compose_graphs(
    operator: Operator,
    request: ComposeRequest,
    config: CompositionConfig = Depends(get_composition_config),
):
    left = from_dict(request.left.model_dump(), config=config)
    right = from_dict(request.right.model_dump(), config=config)

    if operator is Operator.compose:
        if request.relationship is None:
            raise HTTPException(
                status_code=422,
                detail="compose requires a relationship",
            )
        result = operators.compose(
            left,
            right,
            parse_relationship(request.relationship),
            config=config,
        )
    elif operator is Operator.then:
        result = operators.then(left, right, config=config)
    elif operator is Operator.parallel:
        result = operators.parallel(left, right, config=config)
    else:
        result = operators.choice(left, right, config=config)

    return to_dict(result)
