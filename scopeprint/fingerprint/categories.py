"""
CategoryMap -- Which scope a warning category is fingerprinted with

Lookup order for an issue:
  1. issue.category
  2. issue.type
  3. the configured default (method_or_class unless overridden)

The built-in table routes Checkstyle check names; configuration may add
entries or override them.
"""

from typing import Dict, Mapping, Optional, TYPE_CHECKING

from ..core.issues import Issue
from .selectors import ScopeKind

if TYPE_CHECKING:
    from ..config import ScopeConfig


BUILTIN_CATEGORIES: Dict[str, ScopeKind] = {
    # Class
    "FinalClass": ScopeKind.CLASS,
    "HideUtilityClassConstructor": ScopeKind.CLASS,
    "InnerTypeLast": ScopeKind.CLASS,
    "MutableException": ScopeKind.CLASS,
    "TypeName": ScopeKind.CLASS,
    "ClassDataAbstractionCoupling": ScopeKind.CLASS,
    "ClassFanOutComplexity": ScopeKind.CLASS,
    # Environment
    "NeedBraces": ScopeKind.ENVIRONMENT,
    "EmptyBlock": ScopeKind.ENVIRONMENT,
    "EmptyStatement": ScopeKind.ENVIRONMENT,
    "AvoidNestedBlocks": ScopeKind.ENVIRONMENT,
    "InnerAssignment": ScopeKind.ENVIRONMENT,
    "MagicNumber": ScopeKind.ENVIRONMENT,
    "MissingSwitchDefault": ScopeKind.ENVIRONMENT,
    "FallThrough": ScopeKind.ENVIRONMENT,
    "SimplifyBooleanExpression": ScopeKind.ENVIRONMENT,
    "StringLiteralEquality": ScopeKind.ENVIRONMENT,
    "EqualsAvoidNull": ScopeKind.ENVIRONMENT,
    "NestedIfDepth": ScopeKind.ENVIRONMENT,
    "NestedForDepth": ScopeKind.ENVIRONMENT,
    "NestedTryDepth": ScopeKind.ENVIRONMENT,
    "IllegalCatch": ScopeKind.ENVIRONMENT,
    # File
    "InterfaceIsType": ScopeKind.FILE,
    "NewlineAtEndOfFile": ScopeKind.FILE,
    "FileLength": ScopeKind.FILE,
    "OuterTypeNumber": ScopeKind.FILE,
    "OneTopLevelClass": ScopeKind.FILE,
    "AvoidStarImport": ScopeKind.FILE,
    "UnusedImports": ScopeKind.FILE,
    "RedundantImport": ScopeKind.FILE,
    "ImportOrder": ScopeKind.FILE,
    "IllegalImport": ScopeKind.FILE,
    # Instance variable
    "ExplicitInitialization": ScopeKind.INSTANCE_VARIABLE,
    "VisibilityModifier": ScopeKind.INSTANCE_VARIABLE,
    "MemberName": ScopeKind.INSTANCE_VARIABLE,
    "StaticVariableName": ScopeKind.INSTANCE_VARIABLE,
    "ConstantName": ScopeKind.INSTANCE_VARIABLE,
    "DeclarationOrder": ScopeKind.INSTANCE_VARIABLE,
    "JavadocVariable": ScopeKind.INSTANCE_VARIABLE,
    # Method
    "MethodName": ScopeKind.METHOD,
    "MethodLength": ScopeKind.METHOD,
    "ParameterNumber": ScopeKind.METHOD,
    "ParameterName": ScopeKind.METHOD,
    "ReturnCount": ScopeKind.METHOD,
    "CyclomaticComplexity": ScopeKind.METHOD,
    "NPathComplexity": ScopeKind.METHOD,
    "JavadocMethod": ScopeKind.METHOD,
    "FinalParameters": ScopeKind.METHOD,
    "HiddenField": ScopeKind.METHOD,
    "ThrowsCount": ScopeKind.METHOD,
    "DesignForExtension": ScopeKind.METHOD,
    # Method or class
    "RedundantModifier": ScopeKind.METHOD_OR_CLASS,
    "JavadocStyle": ScopeKind.METHOD_OR_CLASS,
    "JavadocType": ScopeKind.METHOD_OR_CLASS,
    "ModifierOrder": ScopeKind.METHOD_OR_CLASS,
    # Name / package
    "PackageName": ScopeKind.NAME_PACKAGE,
    "PackageDeclaration": ScopeKind.NAME_PACKAGE,
}


class CategoryMap:
    """Resolves the scope kind for an issue."""

    def __init__(
        self,
        overrides: Optional[Mapping[str, ScopeKind]] = None,
        default: ScopeKind = ScopeKind.METHOD_OR_CLASS,
    ):
        self._table: Dict[str, ScopeKind] = dict(BUILTIN_CATEGORIES)
        self._table.update(overrides or {})
        self.default = default

    @classmethod
    def from_settings(cls, settings: 'ScopeConfig') -> 'CategoryMap':
        """Build from the `scopes` configuration section."""
        overrides = {
            name: ScopeKind.from_name(value) for name, value in settings.categories.items()
        }
        return cls(overrides, ScopeKind.from_name(settings.default))

    def lookup(self, name: str) -> Optional[ScopeKind]:
        return self._table.get(name) if name else None

    def scope_for(self, issue: Issue) -> ScopeKind:
        """
        Scope kind for an issue.

        Args:
            issue: Issue whose category/type decide the scope

        Returns:
            Mapped ScopeKind, or the default when neither is known
        """
        return self.lookup(issue.category) or self.lookup(issue.type) or self.default

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: str) -> bool:
        return name in self._table
