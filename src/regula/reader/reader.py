import json
from pathlib import Path
from typing import IO, Any, Iterable, List, Mapping, Union

import yaml
from pydantic import ValidationError

from regula.error import RuleDefinitionError

from .datadef import RuleDefinition
from . import logger, config

RULE_DEFINITION_ENCODING = config.RULE_DEFINITION_ENCODING

Source = Union[str, Path, IO[str]]


class RuleDefinitionReader(object):
    ''' Base class of rule definition readers. Subclasses only parse the
        raw documents, validation and defaults are handled here. '''

    def load_rules(self, stream: IO[str]) -> Iterable[Any]:
        raise NotImplementedError('RuleDefinitionReader.load_rules')

    def read(self, source: Source) -> List[RuleDefinition]:
        """
        Read rule definitions from a file path or an open text stream.

        Args:
            source: Path to the definitions file, or a readable text stream

        Returns:
            List of validated RuleDefinition, in document order

        Raises:
            RuleDefinitionError: If a document cannot be parsed or is not a valid rule
        """
        if isinstance(source, (str, Path)):
            with open(source, 'r', encoding=RULE_DEFINITION_ENCODING) as stream:
                documents = list(self.load_rules(stream))
        else:
            documents = list(self.load_rules(source))

        logger.debug('Loaded %d rule definition(s) from %s', len(documents), source)
        return [self.create_rule_definition(doc) for doc in documents if doc is not None]

    def create_rule_definition(self, data: Mapping[str, Any]) -> RuleDefinition:
        if not isinstance(data, Mapping):
            raise RuleDefinitionError("R00.140", f"Rule definition must be a mapping, got: {data!r}")

        if not data.get('condition'):
            raise RuleDefinitionError("R00.141", "The rule condition must be specified", dict(data))

        if not data.get('actions'):
            raise RuleDefinitionError("R00.142", "The rule action(s) must be specified", dict(data))

        try:
            return RuleDefinition.model_validate(data)
        except ValidationError as e:
            raise RuleDefinitionError("R00.143", f"Invalid rule definition: {e}", dict(data)) from e


class YamlRuleDefinitionReader(RuleDefinitionReader):
    ''' One rule per YAML document (documents separated by `---`) '''

    def load_rules(self, stream: IO[str]) -> Iterable[Any]:
        try:
            return list(yaml.safe_load_all(stream))
        except yaml.YAMLError as e:
            raise RuleDefinitionError("R00.144", f"Error parsing YAML rule definitions: {e}") from e


class JsonRuleDefinitionReader(RuleDefinitionReader):
    ''' A JSON array of rules, or a single rule object '''

    def load_rules(self, stream: IO[str]) -> Iterable[Any]:
        try:
            data = json.load(stream)
        except json.JSONDecodeError as e:
            raise RuleDefinitionError("R00.145", f"Error parsing JSON rule definitions: {e}") from e

        return data if isinstance(data, list) else [data]
