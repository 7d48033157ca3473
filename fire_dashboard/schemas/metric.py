"""Wire shape for a single computed figure."""

from typing import Literal, Optional

from pydantic import BaseModel

MetricStatus = Literal["ok", "undefined", "unreachable"]


class MetricValue(BaseModel):
    """
    A figure that may not be computable.

    ``value`` is null unless ``status`` is "ok"; NaN and infinity never reach
    the JSON body.
    """

    value: Optional[float]
    status: MetricStatus
    display: str
