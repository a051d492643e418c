"""Chat model identifiers and their deployment names."""

from enum import Enum
from types import MappingProxyType


class AvailableModel(Enum):
    """Chat models the service knows how to address."""

    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_41 = "gpt-4.1"


DEFAULT_DEPLOYMENT = "gpt-3.5-turbo"

MODEL_DEPLOYMENTS = MappingProxyType(
    {
        AvailableModel.GPT_35_TURBO: "gpt-3.5-turbo",
        AvailableModel.GPT_4: "gpt-4",
        AvailableModel.GPT_41: "gpt-4.1",
    }
)


def get_deployment_name(model: AvailableModel | str | None) -> str:
    """Map a model identifier to its deployment name.

    Args:
        model: An ``AvailableModel``, the enum value as a string, or None.

    Returns:
        Deployment name; unknown identifiers map to ``DEFAULT_DEPLOYMENT``.
    """
    if isinstance(model, str):
        try:
            model = AvailableModel(model)
        except ValueError:
            return DEFAULT_DEPLOYMENT
    return MODEL_DEPLOYMENTS.get(model, DEFAULT_DEPLOYMENT)
