"""Immutable data models for a decoded package description."""

from enum import Enum
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar, Union

from pydantic import AliasChoices, Field, StrictInt, model_validator

from .decoding import DescribedModel, key_presence, nested_payload, unwrap_payload

T = TypeVar("T")


class Range(DescribedModel, Generic[T]):
    """A pair of bounds of the same element type."""

    lower_bound: T
    upper_bound: T


# Requirements


class ExactRequirement(DescribedModel):
    """Requires one exact version."""

    version: str

    @model_validator(mode="before")
    @classmethod
    def unwrap_exact(cls, data: Any) -> Any:
        return unwrap_payload(data, "exact", "version")


class RangeRequirement(DescribedModel):
    """Requires a version between a lower and an upper bound."""

    bounds: Range[str]

    @model_validator(mode="before")
    @classmethod
    def unwrap_range(cls, data: Any) -> Any:
        # one wrapped object carries both bounds
        return unwrap_payload(data, "range", "bounds")


class RevisionRequirement(DescribedModel):
    """Requires a specific source control revision."""

    id: str

    @model_validator(mode="before")
    @classmethod
    def unwrap_revision(cls, data: Any) -> Any:
        return unwrap_payload(data, "revision", "id")


class BranchRequirement(DescribedModel):
    """Requires the tip of a source control branch."""

    name: str

    @model_validator(mode="before")
    @classmethod
    def unwrap_branch(cls, data: Any) -> Any:
        return unwrap_payload(data, "branch", "name")


Requirement = key_presence(
    ("exact", ExactRequirement),
    ("range", RangeRequirement),
    ("revision", RevisionRequirement),
    ("branch", BranchRequirement),
)


# Dependencies


class DependencyKind(str, Enum):
    """Value of the ``type`` field that selects a dependency variant."""

    FILE_SYSTEM = "fileSystem"
    SOURCE_CONTROL = "sourceControl"
    REGISTRY = "registry"


class FileSystemDependency(DescribedModel):
    """A dependency on a package at a local path."""

    kind: ClassVar[DependencyKind] = DependencyKind.FILE_SYSTEM

    type: Literal["fileSystem"] = "fileSystem"
    identity: str
    path: str


class SourceControlDependency(DescribedModel):
    """A dependency fetched from a source control location."""

    kind: ClassVar[DependencyKind] = DependencyKind.SOURCE_CONTROL

    type: Literal["sourceControl"] = "sourceControl"
    identity: str
    location: str = Field(validation_alias=AliasChoices("url", "location"))
    requirement: Requirement


class RegistryDependency(DescribedModel):
    """A dependency resolved through a package registry."""

    kind: ClassVar[DependencyKind] = DependencyKind.REGISTRY

    type: Literal["registry"] = "registry"
    identity: str
    requirement: Requirement


Dependency = Annotated[
    Union[FileSystemDependency, SourceControlDependency, RegistryDependency],
    Field(discriminator="type"),
]


# Platforms


class PlatformRestriction(DescribedModel):
    """Minimum deployment version for one platform."""

    name: str
    version: str
    options: tuple[str, ...] | None = None


# Products


class LibraryType(str, Enum):
    """Linkage of a library product."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    AUTOMATIC = "automatic"


class LibraryProduct(DescribedModel):
    """A library product with its linkage."""

    library_type: LibraryType

    @model_validator(mode="before")
    @classmethod
    def unwrap_library(cls, data: Any) -> Any:
        return unwrap_payload(data, "library", "library_type")


class ExecutableProduct(DescribedModel):
    """An executable product."""


class SnippetProduct(DescribedModel):
    """A snippet product."""


class PluginProduct(DescribedModel):
    """A plugin product."""


class UnitTestProduct(DescribedModel):
    """A product built from test targets."""


class MacroProduct(DescribedModel):
    """A macro product."""


ProductType = key_presence(
    ("library", LibraryProduct),
    ("executable", ExecutableProduct),
    ("snippet", SnippetProduct),
    ("plugin", PluginProduct),
    ("test", UnitTestProduct),
    ("macro", MacroProduct),
)


class Product(DescribedModel):
    """A product vended by the package, built from one or more targets."""

    name: str
    type: ProductType
    targets: tuple[str, ...]


# Resources


class ProcessRule(DescribedModel):
    """Process the resource, optionally for one localization."""

    localization: str | None = None

    @model_validator(mode="before")
    @classmethod
    def unwrap_process(cls, data: Any) -> Any:
        return nested_payload(data, "process")


class CopyRule(DescribedModel):
    """Copy the resource as is."""


class EmbedInCodeRule(DescribedModel):
    """Embed the resource contents in generated code."""


Rule = key_presence(
    ("process", ProcessRule),
    ("copy", CopyRule),
    ("embed_in_code", EmbedInCodeRule),
)


class Resource(DescribedModel):
    """A resource file bundled with a target."""

    rule: Rule
    path: str


# Plugins


class NoNetwork(DescribedModel):
    """No network access."""


class LocalNetwork(DescribedModel):
    """Access to local connections on the listed ports."""

    ports: tuple[StrictInt, ...]

    @model_validator(mode="before")
    @classmethod
    def unwrap_local(cls, data: Any) -> Any:
        return nested_payload(data, "local")


class AllNetwork(DescribedModel):
    """Access to any connection on the listed ports."""

    ports: tuple[StrictInt, ...]

    @model_validator(mode="before")
    @classmethod
    def unwrap_all(cls, data: Any) -> Any:
        return nested_payload(data, "all")


class DockerNetwork(DescribedModel):
    """Access to the Docker daemon socket."""


class UnixDomainSocketNetwork(DescribedModel):
    """Access to Unix domain sockets."""


NetworkScope = key_presence(
    ("none", NoNetwork),
    ("local", LocalNetwork),
    ("all", AllNetwork),
    ("docker", DockerNetwork),
    ("unix_domain_socket", UnixDomainSocketNetwork),
)


class CommandIntent(DescribedModel):
    """How a command plugin is invoked."""

    type: str
    verb: str | None = None
    description: str | None = None


class Permission(DescribedModel):
    """A permission a command plugin asks the user to grant."""

    type: str
    reason: str
    network_scope: NetworkScope


class PluginCapability(DescribedModel):
    """What a plugin target does and which permissions it needs."""

    type: str
    intent: CommandIntent | None = None
    permissions: tuple[Permission, ...] | None = None


# Targets and package


class Target(DescribedModel):
    """A target declared by the package.

    ``type`` is kept as the raw tag emitted by the tool (``library``,
    ``executable``, ``test``, ``plugin``, ...).
    """

    name: str
    type: str
    path: str
    sources: tuple[str, ...]
    c99name: str | None = None
    module_type: str | None = None
    plugin_capability: PluginCapability | None = None
    resources: tuple[Resource, ...] | None = None
    target_dependencies: tuple[str, ...] | None = None
    product_dependencies: tuple[str, ...] | None = None
    product_memberships: tuple[str, ...] | None = None


class Package(DescribedModel):
    """A fully decoded package description.

    Products and targets refer to each other by name only; names are not
    checked for existence.
    """

    name: str
    manifest_display_name: str
    path: str
    tools_version: str
    dependencies: tuple[Dependency, ...]
    platforms: tuple[PlatformRestriction, ...]
    products: tuple[Product, ...]
    targets: tuple[Target, ...]
    default_localization: str | None = None
    c_language_standard: str | None = None
    cxx_language_standard: str | None = None
    swift_languages_versions: tuple[str, ...] | None = None

    def product_named(self, name: str) -> Product | None:
        """Return the first product called ``name``, if any."""
        return next((product for product in self.products if product.name == name), None)

    def target_named(self, name: str) -> Target | None:
        """Return the first target called ``name``, if any."""
        return next((target for target in self.targets if target.name == name), None)


# Tags pydantic inserts into error locations for union members.
UNION_TAGS = frozenset(
    {
        cls.__name__
        for cls in (
            ExactRequirement,
            RangeRequirement,
            RevisionRequirement,
            BranchRequirement,
            LibraryProduct,
            ExecutableProduct,
            SnippetProduct,
            PluginProduct,
            UnitTestProduct,
            MacroProduct,
            ProcessRule,
            CopyRule,
            EmbedInCodeRule,
            NoNetwork,
            LocalNetwork,
            AllNetwork,
            DockerNetwork,
            UnixDomainSocketNetwork,
        )
    }
    | {kind.value for kind in DependencyKind}
)
