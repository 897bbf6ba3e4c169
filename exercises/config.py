"""Configuration for exercise attempts.

These configuration models tune engine policy that the learner-facing
product may want to change per deployment, such as whether a target can be
claimed by more than one source or whether a reset needs confirmation.
"""

from pydantic import BaseModel, Field


class MatchingConfig(BaseModel):
    """Configuration for matching attempts."""

    # When True, matching a target that is already used unmatches the
    # source that held it.
    unique_targets: bool = False
    shuffle_items: bool = True


class OrderingConfig(BaseModel):
    """Configuration for ordering attempts."""

    shuffle_items: bool = True
    reshuffle_on_reset: bool = True


class CompletionConfig(BaseModel):
    """Configuration for fill-in-the-blank attempts."""

    require_all_answers: bool = True


class MultipleChoiceConfig(BaseModel):
    """Configuration for multiple choice attempts."""

    require_selection: bool = True


class ResetConfig(BaseModel):
    """Configuration for the reset confirmation flow."""

    require_confirmation: bool = True


class EngineConfig(BaseModel):
    """Master configuration for all exercise kinds."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    ordering: OrderingConfig = Field(default_factory=OrderingConfig)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    multiple_choice: MultipleChoiceConfig = Field(default_factory=MultipleChoiceConfig)
    reset: ResetConfig = Field(default_factory=ResetConfig)
