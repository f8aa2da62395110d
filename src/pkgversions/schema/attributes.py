"""attribute and type descriptors used to declare data source schemas."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping


class AttrType(ABC):
    """the value type of an attribute, independent of required/optional flags."""

    @abstractmethod
    def describe(self) -> Any:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, AttrType) and self.describe() == other.describe()

    def __hash__(self) -> int:
        return hash(repr(self.describe()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()!r})"


class StringType(AttrType):
    def describe(self) -> Any:
        return "string"


class BoolType(AttrType):
    def describe(self) -> Any:
        return "bool"


class ListType(AttrType):
    def __init__(self, element_type: AttrType):
        self.element_type = element_type

    def describe(self) -> Any:
        return ["list", self.element_type.describe()]


class ObjectType(AttrType):
    def __init__(self, attribute_types: Dict[str, AttrType]):
        self.attribute_types = dict(attribute_types)

    def describe(self) -> Any:
        return ["object", {name: t.describe() for name, t in sorted(self.attribute_types.items())}]


class Attribute(ABC):
    """base for all schema attributes."""
    kind = "attribute"

    def __init__(
        self,
        description: str = "",
        required: bool = False,
        optional: bool = False,
        computed: bool = False,
    ):
        if required and (optional or computed):
            raise ValueError("a required attribute cannot also be optional or computed")
        if not (required or optional or computed):
            raise ValueError("an attribute must be required, optional or computed")
        self.description = description
        self.required = required
        self.optional = optional
        self.computed = computed

    @abstractmethod
    def attr_type(self) -> AttrType:
        pass

    def validate(self, value: Any, path: str) -> List[str]:
        """
        check a plain value against this attribute.

        returns a list of problems, empty when the value conforms.
        null is only a problem for required attributes.
        """
        if value is None:
            return [f"{path}: value is required"] if self.required else []
        return self._validate_value(value, path)

    @abstractmethod
    def _validate_value(self, value: Any, path: str) -> List[str]:
        pass

    def describe(self) -> Dict[str, Any]:
        desc: Dict[str, Any] = {"kind": self.kind, "type": self.attr_type().describe()}
        for flag in ("required", "optional", "computed"):
            if getattr(self, flag):
                desc[flag] = True
        if self.description:
            desc["description"] = self.description
        return desc


class StringAttribute(Attribute):
    kind = "string"

    def attr_type(self) -> AttrType:
        return StringType()

    def _validate_value(self, value, path):
        if not isinstance(value, str):
            return [f"{path}: expected string, got {type(value).__name__}"]
        return []


class BoolAttribute(Attribute):
    kind = "bool"

    def attr_type(self) -> AttrType:
        return BoolType()

    def _validate_value(self, value, path):
        if not isinstance(value, bool):
            return [f"{path}: expected bool, got {type(value).__name__}"]
        return []


class NestedObject:
    """the attributes of one nested object."""

    def __init__(self, attributes: Mapping[str, Attribute]):
        self.attributes = dict(attributes)

    def attr_type(self) -> ObjectType:
        return ObjectType({name: a.attr_type() for name, a in self.attributes.items()})

    def validate(self, value: Any, path: str) -> List[str]:
        if not isinstance(value, Mapping):
            return [f"{path}: expected object, got {type(value).__name__}"]

        problems = []
        missing = set(self.attributes) - set(value)
        unknown = set(value) - set(self.attributes)
        for name in sorted(missing):
            problems.append(f"{path}.{name}: attribute missing")
        for name in sorted(unknown):
            problems.append(f"{path}.{name}: attribute not in schema")
        for name, attribute in self.attributes.items():
            if name in value:
                problems.extend(attribute.validate(value[name], f"{path}.{name}"))
        return problems

    def describe(self) -> Dict[str, Any]:
        return {name: a.describe() for name, a in sorted(self.attributes.items())}


class SingleNestedAttribute(Attribute):
    kind = "single_nested"

    def __init__(self, attributes: Mapping[str, Attribute], **kwargs):
        super().__init__(**kwargs)
        self.nested = NestedObject(attributes)

    def attr_type(self) -> AttrType:
        return self.nested.attr_type()

    def _validate_value(self, value, path):
        return self.nested.validate(value, path)

    def describe(self) -> Dict[str, Any]:
        desc = super().describe()
        desc["attributes"] = self.nested.describe()
        return desc


class ListNestedAttribute(Attribute):
    kind = "list_nested"

    def __init__(self, nested_object: NestedObject, **kwargs):
        super().__init__(**kwargs)
        self.nested_object = nested_object

    def attr_type(self) -> AttrType:
        return ListType(self.nested_object.attr_type())

    def _validate_value(self, value, path):
        if not isinstance(value, (list, tuple)):
            return [f"{path}: expected list, got {type(value).__name__}"]

        problems = []
        for i, element in enumerate(value):
            if element is None:
                problems.append(f"{path}[{i}]: list element is null")
            else:
                problems.extend(self.nested_object.validate(element, f"{path}[{i}]"))
        return problems

    def describe(self) -> Dict[str, Any]:
        desc = super().describe()
        desc["nested_object"] = self.nested_object.describe()
        return desc


class Schema:
    """top-level schema of a data source: its input and computed attributes."""

    def __init__(self, attributes: Mapping[str, Attribute], description: str = ""):
        self.description = description
        self.attributes = dict(attributes)

    @property
    def input_attributes(self) -> Dict[str, Attribute]:
        return {name: a for name, a in self.attributes.items() if not a.computed}

    def state_type(self) -> ObjectType:
        return ObjectType({name: a.attr_type() for name, a in self.attributes.items()})

    def validate_input(self, config: Mapping[str, Any]) -> List[str]:
        """check user supplied configuration; computed attributes may not be set."""
        problems = []
        for name in sorted(set(config) - set(self.input_attributes)):
            problems.append(f"{name}: attribute cannot be configured")
        for name, attribute in self.input_attributes.items():
            value = config.get(name)
            problems.extend(attribute.validate(value, name))
            if attribute.required and isinstance(value, str) and not value.strip():
                problems.append(f"{name}: value must not be empty")
        return problems

    def validate_state(self, state: Mapping[str, Any]) -> List[str]:
        """check a complete state value before it is handed to the host."""
        return NestedObject(self.attributes).validate(state, "state")

    def describe(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "attributes": {name: a.describe() for name, a in sorted(self.attributes.items())},
        }
