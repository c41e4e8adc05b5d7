"""
FastAPI routes serving the alert form's selection lists.

Lists are read from JSON data files in the configured options directory.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path

from alert_bicep.api.schemas.options import SelectOption
from alert_bicep.core.config import settings
from alert_bicep.domain.enums import OptionKind
from alert_bicep.services.option_loader import load_options

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/options", tags=["Options"])


@router.get("", response_model=list[str])
def list_option_kinds() -> list[str]:
    """List the available option lists."""
    return [kind.value for kind in OptionKind]


@router.get("/{kind}", response_model=list[SelectOption])
def get_options(
    kind: Annotated[str, Path(description="services, eventTypes, regions or severity")],
) -> list[dict[str, str]]:
    """
    Return one selection list.

    Raises:
        NotFoundError: If the list kind is unknown (404)
        OptionDataError: If the data file is missing or malformed (500)
    """
    return load_options(kind, settings.options_data_dir)
