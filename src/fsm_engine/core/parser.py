"""
Template parser for declarative YAML/JSON definitions
"""
import yaml
import json
from typing import Dict, Any, Optional, Union
from pathlib import Path
import logging

from pydantic import ValidationError

from ..models.definition import TemplateDefinition
from ..exceptions import TemplateParseError
from .template import StateMachineTemplate


logger = logging.getLogger(__name__)


class TemplateParser:
    """Builds StateMachineTemplate objects from declarative definitions.

    Conditions, callbacks and hooks in a definition are method names resolved
    on the handler when the machine runs.
    """

    def __init__(self, template_class: type = StateMachineTemplate):
        self.template_class = template_class
        self.parsers = {
            'yaml': self._parse_yaml,
            'yml': self._parse_yaml,
            'json': self._parse_json
        }

    def parse(self, source: Union[str, Path, Dict[str, Any]]) -> StateMachineTemplate:
        """
        Parse a template definition

        Args:
            source: file path, YAML/JSON string or already loaded dict

        Returns:
            StateMachineTemplate: the compiled template
        """
        if isinstance(source, dict):
            return self.parse_dict(source)

        if isinstance(source, Path):
            return self.parse_file(source)

        if isinstance(source, str):
            path = Path(source)
            if '\n' not in source and path.suffix and path.is_file():
                return self.parse_file(path)
            return self.parse_string(source)

        raise TemplateParseError(f"Unsupported source type: {type(source)}")

    def parse_file(self, file_path: Union[str, Path]) -> StateMachineTemplate:
        file_path = Path(file_path)
        suffix = file_path.suffix.lower().lstrip('.')
        if suffix not in self.parsers:
            raise TemplateParseError(f"Unsupported file format: {suffix}")

        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()

        logger.debug(f"Loading template from {file_path}")
        return self.parse_dict(self.parsers[suffix](content))

    def parse_string(self, content: str) -> StateMachineTemplate:
        """Parse a YAML or JSON string (JSON is a subset of YAML)"""
        return self.parse_dict(self._parse_yaml(content))

    def _parse_yaml(self, content: str) -> Dict[str, Any]:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise TemplateParseError(f"Failed to parse YAML: {e}")

    def _parse_json(self, content: str) -> Dict[str, Any]:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise TemplateParseError(f"Failed to parse JSON: {e}")

    def load_definition(self, data: Any) -> TemplateDefinition:
        """Validate a loaded payload"""
        if not isinstance(data, dict):
            raise TemplateParseError(f"Template definition must be a mapping, got {type(data).__name__}")
        if 'template' in data:
            data = data['template']
        try:
            return TemplateDefinition.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise TemplateParseError(
                f"Invalid template definition: {'; '.join(errors)}",
                {"errors": errors}
            )

    def parse_dict(self, data: Any) -> StateMachineTemplate:
        return self.compile(self.load_definition(data))

    def compile(
        self,
        definition: TemplateDefinition,
        base: Optional[StateMachineTemplate] = None
    ) -> StateMachineTemplate:
        """Apply a definition to a fresh template, or to a clone of ``base``"""
        template = base.clone() if base is not None else self.template_class()
        if definition.all_states_transient:
            template.all_states_transient()

        for state in definition.states:
            template.declare_state(
                state.name,
                initial=state.initial,
                final=state.final,
                transient=state.transient
            )

        for transition in definition.transitions:
            template.declare_transition(
                transition.source,
                transition.target,
                condition=transition.condition,
                negate=transition.negate,
                disable=transition.disable,
                callback=transition.do,
                description=transition.description
            )

        for hook in definition.hooks:
            template.register_hook(hook)

        logger.info(
            f"Compiled template '{definition.name or 'unnamed'}' with "
            f"{len(definition.states)} states and {len(definition.transitions)} transitions"
        )
        return template

    def to_dict(self, template: StateMachineTemplate, name: Optional[str] = None) -> Dict[str, Any]:
        """Describe a template as a plain definition payload"""
        states = []
        for state in template.states.values():
            entry = {"name": state.name}
            for flag in ("initial", "final", "transient"):
                if getattr(state, flag):
                    entry[flag] = True
            states.append(entry)

        transitions = []
        for source, targets in template.transitions.items():
            for bucket in targets.values():
                for transition in bucket:
                    entry = {"from": source, "to": transition.target}
                    if transition.guarded:
                        key = "unless" if transition.negate else "if"
                        entry[key] = self._callback_name(transition.condition, transition)
                    if transition.callback is not None:
                        entry["do"] = self._callback_name(transition.callback, transition)
                    if transition.description:
                        entry["description"] = transition.description
                    transitions.append(entry)

        hooks = [self._callback_name(hook) for hook in template.hooks]

        payload: Dict[str, Any] = {}
        if name:
            payload["name"] = name
        payload["states"] = states
        payload["transitions"] = transitions
        if hooks:
            payload["hooks"] = hooks
        return {"template": payload}

    def serialize(self, template: StateMachineTemplate, fmt: str = "yaml", name: Optional[str] = None) -> str:
        data = self.to_dict(template, name=name)
        if fmt == "json":
            return json.dumps(data, ensure_ascii=False, indent=2)
        if fmt in ("yaml", "yml"):
            return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
        raise TemplateParseError(f"Unsupported serialisation format: {fmt}")

    def _callback_name(self, callback, transition=None) -> str:
        if not callback.is_named:
            where = f" on {transition}" if transition is not None else ""
            raise TemplateParseError(f"Cannot serialise closure '{callback.tag}'{where}")
        return callback.name
