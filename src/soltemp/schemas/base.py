"""Shared pydantic base for every soltemp configuration layer.

ParamConfig, UserConfig, CLIConfig and InternalConfig all derive from
``SoltempBaseModel``. UserConfig loosens it (aliases, unknown keys ignored)
and InternalConfig tightens it (frozen).
"""

from pydantic import BaseModel, ConfigDict


class SoltempBaseModel(BaseModel):
    """Strict defaults: unknown keys rejected, assignments re-validated,
    string values stripped (so ``" csv "`` resolves to ``"csv"``).
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
