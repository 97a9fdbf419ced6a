"""
Declarative template definition models
"""
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional, List


class StateDefinition(BaseModel):
    """State entry of a template file"""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="State name")
    initial: bool = Field(False, description="Machine starts here")
    final: bool = Field(False, description="Machine may finish here")
    transient: bool = Field(False, description="Passed through automatically by run()")


class TransitionDefinition(BaseModel):
    """Transition entry of a template file"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    source: str = Field(..., alias="from", description="Source state")
    target: str = Field(..., alias="to", description="Target state")
    if_: Optional[str] = Field(None, alias="if", description="Name of the guarding method")
    unless: Optional[str] = Field(None, description="Name of the negated guarding method")
    do: Optional[str] = Field(None, description="Name of the callback method")
    disable: bool = Field(False, description="Drop inherited transitions for this pair")
    description: Optional[str] = Field(None, description="Human readable note")

    @model_validator(mode="after")
    def _single_guard(self) -> "TransitionDefinition":
        if self.if_ is not None and self.unless is not None:
            raise ValueError("a transition accepts either 'if' or 'unless', not both")
        return self

    @property
    def condition(self) -> Optional[str]:
        return self.if_ if self.if_ is not None else self.unless

    @property
    def negate(self) -> bool:
        return self.unless is not None


class TemplateDefinition(BaseModel):
    """Whole template file"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, description="Template name")
    all_states_transient: bool = Field(False, description="Mark every state as transient")
    states: List[StateDefinition] = Field(default_factory=list)
    transitions: List[TransitionDefinition] = Field(default_factory=list)
    hooks: List[str] = Field(default_factory=list, description="Around-transition hook method names")

    @model_validator(mode="after")
    def _unique_states(self) -> "TemplateDefinition":
        seen = set()
        for state in self.states:
            if state.name in seen:
                raise ValueError(f"state '{state.name}' declared twice")
            seen.add(state.name)
        return self
