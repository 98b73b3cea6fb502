"""Authoritative metadata for the UI markup vocabulary.

This module is the single source of truth for what the markup language can
express. It provides:
- The declarative type table: every component type, its ancestor and the
  properties it declares itself (inherited properties are never repeated)
- Enumerated value domains, as ordered (name, key) constant lists
- The universal base attributes shared by every element
- `TypeRegistry`, an explicit tag/type registry value passed to the
  collector and compiler

Example usage:
    >>> from markup_assist.schema import default_registry
    >>> registry = default_registry()
    >>> registry.type_for("button").identity
    'javax.swing.JButton'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Protocol


class ValueKind(str, Enum):
    """Value kinds an attribute declaration can carry."""

    TEXT = "text"
    BOOLEAN = "boolean"
    TOKENS = "tokens"


class PropertyType(str, Enum):
    """Declared value type of a component property.

    Scalar and resource types (numbers, strings, colors, fonts, icons,
    images, key strokes) are written as free text in markup. OBJECT covers
    everything markup cannot express (models, dates, layout managers).
    """

    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    COLOR = "color"
    FONT = "font"
    ICON = "icon"
    IMAGE = "image"
    KEY_STROKE = "key_stroke"
    ENUM = "enum"
    OBJECT = "object"


class ContentModel(str, Enum):
    """Element content model."""

    EMPTY = "EMPTY"
    ANY = "ANY"


# Free-text property types
TEXT_PROPERTY_TYPES: frozenset[PropertyType] = frozenset(
    {
        PropertyType.INT,
        PropertyType.LONG,
        PropertyType.FLOAT,
        PropertyType.DOUBLE,
        PropertyType.CHAR,
        PropertyType.STRING,
        PropertyType.NUMBER,
        PropertyType.COLOR,
        PropertyType.FONT,
        PropertyType.ICON,
        PropertyType.IMAGE,
        PropertyType.KEY_STROKE,
    }
)

# Integer property types that may carry a selector constant
SELECTOR_PROPERTY_TYPES: frozenset[PropertyType] = frozenset(
    {PropertyType.INT, PropertyType.LONG}
)


# === DATA MODEL ===


@dataclass(frozen=True)
class EnumConstant:
    """A single constant of an enumerated domain.

    Attributes:
        name: Constant name (e.g. "COMMIT_OR_REVERT").
        key: Markup key used when the constant backs a selector attribute.
    """

    name: str
    key: str

    @property
    def token(self) -> str:
        """Markup token derived from the constant name."""
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class EnumDomain:
    """An ordered, named set of enumerated constants."""

    key: str
    constants: tuple[EnumConstant, ...]

    def keys(self) -> tuple[str, ...]:
        """Selector keys in declaration order."""
        return tuple(constant.key for constant in self.constants)

    def tokens(self) -> tuple[str, ...]:
        """Name-derived tokens in declaration order."""
        return tuple(constant.token for constant in self.constants)


@dataclass(frozen=True)
class PropertyDef:
    """A property a type declares itself.

    Attributes:
        name: Property (and attribute) name.
        type: Declared value type.
        domain: Enum domain key, for ENUM properties.
    """

    name: str
    type: PropertyType
    domain: str | None = None


@dataclass(frozen=True)
class TypeNode:
    """A component type in the metadata table.

    Attributes:
        identity: Fully qualified type name.
        base: Identity of the immediate ancestor (None only for the root).
        properties: Properties declared by this type, in declaration order.
    """

    identity: str
    base: str | None
    properties: tuple[PropertyDef, ...] = ()

    @property
    def simple_name(self) -> str:
        """Unqualified type name."""
        return self.identity.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class AttributeDeclaration:
    """An attribute declared inside a grammar fragment."""

    name: str
    kind: ValueKind
    tokens: tuple[str, ...] = field(default_factory=tuple)

    @property
    def definition(self) -> str:
        """Grammar rendering of the attribute type."""
        if self.kind == ValueKind.TEXT:
            return "CDATA"
        return "(" + "|".join(self.tokens) + ")"


@dataclass(frozen=True)
class ElementDeclaration:
    """A tag declaration bound to a type fragment."""

    tag: str
    type_identity: str
    content: ContentModel


class UnresolvedTypeError(LookupError):
    """Raised when a type identity or enum domain cannot be resolved.

    Attributes:
        identity: The name that failed to resolve.
    """

    def __init__(self, identity: str, what: str = "type"):
        super().__init__(f"Unable to resolve {what} '{identity}'")
        self.identity = identity


class TypeResolver(Protocol):
    """Capability that maps names to type metadata."""

    def resolve(self, identity: str) -> TypeNode:
        """Return the type for an identity or raise UnresolvedTypeError."""
        ...

    def resolve_domain(self, key: str) -> EnumDomain:
        """Return the enum domain for a key or raise UnresolvedTypeError."""
        ...


# === FIXED VOCABULARY ===

ROOT_TYPE = "java.lang.Object"

# Tags, type identities, attribute names and tokens written into the grammar
NAME_PATTERN = r'^[^\s"%;<>()|]+$'

# Fragment holding the attributes every element accepts
BASE_FRAGMENT = "org.httprpc.sierra.UILoader"

BASE_ATTRIBUTES: tuple[str, ...] = (
    "name",
    "group",
    "border",
    "padding",
    "title",
    "weight",
    "size",
    "tab-title",
    "tab-icon",
    "style",
    "style-class",
)

BOOLEAN_TOKENS: tuple[str, ...] = ("true", "false")

TEXT_INPUT_TYPE = "javax.swing.JTextField"

# Appended to the text input fragment after its own properties
TEXT_INPUT_ATTRIBUTES: tuple[AttributeDeclaration, ...] = (
    AttributeDeclaration("placeholderText", ValueKind.TEXT),
    AttributeDeclaration("showClearButton", ValueKind.BOOLEAN, BOOLEAN_TOKENS),
    AttributeDeclaration("leadingIcon", ValueKind.TEXT),
    AttributeDeclaration("trailingIcon", ValueKind.TEXT),
)

# Types whose elements (and their descendants') accept child content
CONTAINER_TYPES: tuple[str, ...] = (
    "javax.swing.JPanel",
    "javax.swing.JScrollPane",
    "javax.swing.JSplitPane",
    "javax.swing.JTabbedPane",
    "javax.swing.JToolBar",
    "javax.swing.JMenuBar",
    "javax.swing.JMenu",
    "org.httprpc.sierra.MenuButton",
)


def _domain(key: str, *constants: tuple[str, str]) -> EnumDomain:
    return EnumDomain(key, tuple(EnumConstant(name, k) for name, k in constants))


HORIZONTAL_ALIGNMENT = _domain(
    "org.httprpc.sierra.HorizontalAlignment",
    ("LEFT", "left"),
    ("RIGHT", "right"),
    ("CENTER", "center"),
    ("LEADING", "leading"),
    ("TRAILING", "trailing"),
)
VERTICAL_ALIGNMENT = _domain(
    "org.httprpc.sierra.VerticalAlignment",
    ("TOP", "top"),
    ("BOTTOM", "bottom"),
    ("CENTER", "center"),
)
ORIENTATION = _domain(
    "org.httprpc.sierra.UILoader.Orientation",
    ("HORIZONTAL", "horizontal"),
    ("VERTICAL", "vertical"),
)
FOCUS_LOST_BEHAVIOR = _domain(
    "org.httprpc.sierra.UILoader.FocusLostBehavior",
    ("COMMIT", "commit"),
    ("COMMIT_OR_REVERT", "commit-or-revert"),
    ("REVERT", "revert"),
    ("PERSIST", "persist"),
)
HORIZONTAL_SCROLL_BAR_POLICY = _domain(
    "org.httprpc.sierra.UILoader.HorizontalScrollBarPolicy",
    ("AS_NEEDED", "as-needed"),
    ("NEVER", "never"),
    ("ALWAYS", "always"),
)
VERTICAL_SCROLL_BAR_POLICY = _domain(
    "org.httprpc.sierra.UILoader.VerticalScrollBarPolicy",
    ("AS_NEEDED", "as-needed"),
    ("NEVER", "never"),
    ("ALWAYS", "always"),
)
TAB_PLACEMENT = _domain(
    "org.httprpc.sierra.UILoader.TabPlacement",
    ("TOP", "top"),
    ("LEFT", "left"),
    ("BOTTOM", "bottom"),
    ("RIGHT", "right"),
)
TAB_LAYOUT_POLICY = _domain(
    "org.httprpc.sierra.UILoader.TabLayoutPolicy",
    ("WRAP", "wrap"),
    ("SCROLL", "scroll"),
)

BUILTIN_DOMAINS: tuple[EnumDomain, ...] = (
    HORIZONTAL_ALIGNMENT,
    VERTICAL_ALIGNMENT,
    ORIENTATION,
    FOCUS_LOST_BEHAVIOR,
    HORIZONTAL_SCROLL_BAR_POLICY,
    VERTICAL_SCROLL_BAR_POLICY,
    TAB_PLACEMENT,
    TAB_LAYOUT_POLICY,
)

# Integer-valued attributes whose values are selector keys
SELECTOR_ATTRIBUTES: Mapping[str, str] = MappingProxyType(
    {
        "horizontalAlignment": HORIZONTAL_ALIGNMENT.key,
        "verticalAlignment": VERTICAL_ALIGNMENT.key,
        "orientation": ORIENTATION.key,
        "focusLostBehavior": FOCUS_LOST_BEHAVIOR.key,
        "horizontalScrollBarPolicy": HORIZONTAL_SCROLL_BAR_POLICY.key,
        "verticalScrollBarPolicy": VERTICAL_SCROLL_BAR_POLICY.key,
        "tabPlacement": TAB_PLACEMENT.key,
        "tabLayoutPolicy": TAB_LAYOUT_POLICY.key,
    }
)


# === BUILT-IN TYPE TABLE ===

_T = PropertyType


def _type(identity: str, base: str, *properties: tuple) -> TypeNode:
    return TypeNode(identity, base, tuple(PropertyDef(*p) for p in properties))


_SWING_TYPES: tuple[TypeNode, ...] = (
    _type(
        "java.awt.Component",
        ROOT_TYPE,
        ("background", _T.COLOR),
        ("foreground", _T.COLOR),
        ("font", _T.FONT),
        ("enabled", _T.BOOLEAN),
        ("visible", _T.BOOLEAN),
        ("focusable", _T.BOOLEAN),
        ("ignoreRepaint", _T.BOOLEAN),
        ("name", _T.STRING),
        ("locale", _T.OBJECT),
        ("cursor", _T.OBJECT),
        ("componentOrientation", _T.OBJECT),
        ("dropTarget", _T.OBJECT),
        ("location", _T.OBJECT),
        ("bounds", _T.OBJECT),
    ),
    _type(
        "java.awt.Container",
        "java.awt.Component",
        ("focusCycleRoot", _T.BOOLEAN),
        ("focusTraversalPolicyProvider", _T.BOOLEAN),
        ("focusTraversalPolicy", _T.OBJECT),
        ("layout", _T.OBJECT),
    ),
    _type(
        "javax.swing.JComponent",
        "java.awt.Container",
        ("alignmentX", _T.FLOAT),
        ("alignmentY", _T.FLOAT),
        ("autoscrolls", _T.BOOLEAN),
        ("debugGraphicsOptions", _T.INT),
        ("doubleBuffered", _T.BOOLEAN),
        ("inheritsPopupMenu", _T.BOOLEAN),
        ("opaque", _T.BOOLEAN),
        ("requestFocusEnabled", _T.BOOLEAN),
        ("toolTipText", _T.STRING),
        ("verifyInputWhenFocusTarget", _T.BOOLEAN),
        ("componentPopupMenu", _T.OBJECT),
        ("inputVerifier", _T.OBJECT),
        ("transferHandler", _T.OBJECT),
        ("minimumSize", _T.OBJECT),
        ("preferredSize", _T.OBJECT),
        ("maximumSize", _T.OBJECT),
    ),
    _type(
        "javax.swing.AbstractButton",
        "javax.swing.JComponent",
        ("action", _T.OBJECT),
        ("actionCommand", _T.STRING),
        ("borderPainted", _T.BOOLEAN),
        ("contentAreaFilled", _T.BOOLEAN),
        ("disabledIcon", _T.ICON),
        ("disabledSelectedIcon", _T.ICON),
        ("displayedMnemonicIndex", _T.INT),
        ("focusPainted", _T.BOOLEAN),
        ("hideActionText", _T.BOOLEAN),
        ("horizontalAlignment", _T.INT),
        ("horizontalTextPosition", _T.INT),
        ("icon", _T.ICON),
        ("iconTextGap", _T.INT),
        ("margin", _T.OBJECT),
        ("mnemonic", _T.INT),
        ("model", _T.OBJECT),
        ("multiClickThreshhold", _T.LONG),
        ("pressedIcon", _T.ICON),
        ("rolloverEnabled", _T.BOOLEAN),
        ("rolloverIcon", _T.ICON),
        ("rolloverSelectedIcon", _T.ICON),
        ("selected", _T.BOOLEAN),
        ("selectedIcon", _T.ICON),
        ("text", _T.STRING),
        ("verticalAlignment", _T.INT),
        ("verticalTextPosition", _T.INT),
    ),
    _type(
        "javax.swing.JButton",
        "javax.swing.AbstractButton",
        ("defaultCapable", _T.BOOLEAN),
    ),
    _type("javax.swing.JToggleButton", "javax.swing.AbstractButton"),
    _type("javax.swing.JRadioButton", "javax.swing.JToggleButton"),
    _type(
        "javax.swing.JCheckBox",
        "javax.swing.JToggleButton",
        ("borderPaintedFlat", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JMenuItem",
        "javax.swing.AbstractButton",
        ("accelerator", _T.KEY_STROKE),
        ("armed", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JMenu",
        "javax.swing.JMenuItem",
        ("delay", _T.INT),
        ("popupMenuVisible", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JCheckBoxMenuItem",
        "javax.swing.JMenuItem",
        ("state", _T.BOOLEAN),
    ),
    _type("javax.swing.JRadioButtonMenuItem", "javax.swing.JMenuItem"),
    _type(
        "javax.swing.JLabel",
        "javax.swing.JComponent",
        ("disabledIcon", _T.ICON),
        ("displayedMnemonic", _T.INT),
        ("displayedMnemonicIndex", _T.INT),
        ("horizontalAlignment", _T.INT),
        ("horizontalTextPosition", _T.INT),
        ("icon", _T.ICON),
        ("iconTextGap", _T.INT),
        ("labelFor", _T.OBJECT),
        ("text", _T.STRING),
        ("verticalAlignment", _T.INT),
        ("verticalTextPosition", _T.INT),
    ),
    _type(
        "javax.swing.text.JTextComponent",
        "javax.swing.JComponent",
        ("caretColor", _T.COLOR),
        ("caretPosition", _T.INT),
        ("disabledTextColor", _T.COLOR),
        ("document", _T.OBJECT),
        ("dragEnabled", _T.BOOLEAN),
        ("editable", _T.BOOLEAN),
        ("focusAccelerator", _T.CHAR),
        ("highlighter", _T.OBJECT),
        ("margin", _T.OBJECT),
        ("selectedTextColor", _T.COLOR),
        ("selectionColor", _T.COLOR),
        ("selectionEnd", _T.INT),
        ("selectionStart", _T.INT),
        ("text", _T.STRING),
    ),
    _type(
        "javax.swing.JTextField",
        "javax.swing.text.JTextComponent",
        ("actionCommand", _T.STRING),
        ("columns", _T.INT),
        ("horizontalAlignment", _T.INT),
        ("scrollOffset", _T.INT),
    ),
    _type(
        "javax.swing.JPasswordField",
        "javax.swing.JTextField",
        ("echoChar", _T.CHAR),
    ),
    _type(
        "javax.swing.JFormattedTextField",
        "javax.swing.JTextField",
        ("focusLostBehavior", _T.INT),
        ("formatterFactory", _T.OBJECT),
        ("value", _T.OBJECT),
    ),
    _type(
        "javax.swing.JTextArea",
        "javax.swing.text.JTextComponent",
        ("columns", _T.INT),
        ("lineWrap", _T.BOOLEAN),
        ("rows", _T.INT),
        ("tabSize", _T.INT),
        ("wrapStyleWord", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JEditorPane",
        "javax.swing.text.JTextComponent",
        ("contentType", _T.STRING),
        ("editorKit", _T.OBJECT),
        ("page", _T.OBJECT),
    ),
    _type(
        "javax.swing.JComboBox",
        "javax.swing.JComponent",
        ("editable", _T.BOOLEAN),
        ("lightWeightPopupEnabled", _T.BOOLEAN),
        ("maximumRowCount", _T.INT),
        ("model", _T.OBJECT),
        ("popupVisible", _T.BOOLEAN),
        ("prototypeDisplayValue", _T.OBJECT),
        ("renderer", _T.OBJECT),
        ("selectedIndex", _T.INT),
    ),
    _type(
        "javax.swing.JSpinner",
        "javax.swing.JComponent",
        ("editor", _T.OBJECT),
        ("model", _T.OBJECT),
        ("value", _T.OBJECT),
    ),
    _type(
        "javax.swing.JSlider",
        "javax.swing.JComponent",
        ("extent", _T.INT),
        ("inverted", _T.BOOLEAN),
        ("labelTable", _T.OBJECT),
        ("majorTickSpacing", _T.INT),
        ("maximum", _T.INT),
        ("minimum", _T.INT),
        ("minorTickSpacing", _T.INT),
        ("orientation", _T.INT),
        ("paintLabels", _T.BOOLEAN),
        ("paintTicks", _T.BOOLEAN),
        ("paintTrack", _T.BOOLEAN),
        ("snapToTicks", _T.BOOLEAN),
        ("value", _T.INT),
        ("valueIsAdjusting", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JProgressBar",
        "javax.swing.JComponent",
        ("borderPainted", _T.BOOLEAN),
        ("indeterminate", _T.BOOLEAN),
        ("maximum", _T.INT),
        ("minimum", _T.INT),
        ("orientation", _T.INT),
        ("string", _T.STRING),
        ("stringPainted", _T.BOOLEAN),
        ("value", _T.INT),
    ),
    _type(
        "javax.swing.JSeparator",
        "javax.swing.JComponent",
        ("orientation", _T.INT),
    ),
    _type(
        "javax.swing.JScrollPane",
        "javax.swing.JComponent",
        ("columnHeaderView", _T.OBJECT),
        ("horizontalScrollBarPolicy", _T.INT),
        ("rowHeaderView", _T.OBJECT),
        ("verticalScrollBarPolicy", _T.INT),
        ("viewportView", _T.OBJECT),
        ("wheelScrollingEnabled", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JSplitPane",
        "javax.swing.JComponent",
        ("continuousLayout", _T.BOOLEAN),
        ("dividerLocation", _T.INT),
        ("dividerSize", _T.INT),
        ("leftComponent", _T.OBJECT),
        ("oneTouchExpandable", _T.BOOLEAN),
        ("orientation", _T.INT),
        ("resizeWeight", _T.DOUBLE),
        ("rightComponent", _T.OBJECT),
    ),
    _type(
        "javax.swing.JTabbedPane",
        "javax.swing.JComponent",
        ("model", _T.OBJECT),
        ("selectedIndex", _T.INT),
        ("tabLayoutPolicy", _T.INT),
        ("tabPlacement", _T.INT),
    ),
    _type(
        "javax.swing.JToolBar",
        "javax.swing.JComponent",
        ("borderPainted", _T.BOOLEAN),
        ("floatable", _T.BOOLEAN),
        ("margin", _T.OBJECT),
        ("orientation", _T.INT),
        ("rollover", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JMenuBar",
        "javax.swing.JComponent",
        ("borderPainted", _T.BOOLEAN),
        ("margin", _T.OBJECT),
    ),
    _type(
        "javax.swing.JList",
        "javax.swing.JComponent",
        ("dragEnabled", _T.BOOLEAN),
        ("fixedCellHeight", _T.INT),
        ("fixedCellWidth", _T.INT),
        ("layoutOrientation", _T.INT),
        ("listData", _T.OBJECT),
        ("model", _T.OBJECT),
        ("selectedIndex", _T.INT),
        ("selectionBackground", _T.COLOR),
        ("selectionForeground", _T.COLOR),
        ("selectionMode", _T.INT),
        ("visibleRowCount", _T.INT),
    ),
    _type(
        "javax.swing.JTable",
        "javax.swing.JComponent",
        ("autoCreateColumnsFromModel", _T.BOOLEAN),
        ("autoCreateRowSorter", _T.BOOLEAN),
        ("autoResizeMode", _T.INT),
        ("cellSelectionEnabled", _T.BOOLEAN),
        ("columnSelectionAllowed", _T.BOOLEAN),
        ("dragEnabled", _T.BOOLEAN),
        ("fillsViewportHeight", _T.BOOLEAN),
        ("gridColor", _T.COLOR),
        ("model", _T.OBJECT),
        ("rowHeight", _T.INT),
        ("rowMargin", _T.INT),
        ("rowSelectionAllowed", _T.BOOLEAN),
        ("selectionBackground", _T.COLOR),
        ("selectionForeground", _T.COLOR),
        ("showGrid", _T.BOOLEAN),
        ("showHorizontalLines", _T.BOOLEAN),
        ("showVerticalLines", _T.BOOLEAN),
    ),
    _type(
        "javax.swing.JTree",
        "javax.swing.JComponent",
        ("dragEnabled", _T.BOOLEAN),
        ("editable", _T.BOOLEAN),
        ("expandsSelectedPaths", _T.BOOLEAN),
        ("largeModel", _T.BOOLEAN),
        ("model", _T.OBJECT),
        ("rootVisible", _T.BOOLEAN),
        ("rowHeight", _T.INT),
        ("scrollsOnExpand", _T.BOOLEAN),
        ("showsRootHandles", _T.BOOLEAN),
        ("toggleClickCount", _T.INT),
        ("visibleRowCount", _T.INT),
    ),
    _type(
        "javax.swing.JColorChooser",
        "javax.swing.JComponent",
        ("color", _T.COLOR),
        ("dragEnabled", _T.BOOLEAN),
        ("previewPanel", _T.OBJECT),
    ),
    _type("javax.swing.JPanel", "javax.swing.JComponent"),
)

_SIERRA_TYPES: tuple[TypeNode, ...] = (
    _type("org.httprpc.sierra.LayoutPanel", "javax.swing.JPanel"),
    _type(
        "org.httprpc.sierra.BoxPanel",
        "org.httprpc.sierra.LayoutPanel",
        ("horizontalAlignment", _T.ENUM, HORIZONTAL_ALIGNMENT.key),
        ("verticalAlignment", _T.ENUM, VERTICAL_ALIGNMENT.key),
        ("spacing", _T.INT),
    ),
    _type(
        "org.httprpc.sierra.RowPanel",
        "org.httprpc.sierra.BoxPanel",
        ("alignToBaseline", _T.BOOLEAN),
    ),
    _type(
        "org.httprpc.sierra.ColumnPanel",
        "org.httprpc.sierra.BoxPanel",
        ("alignToGrid", _T.BOOLEAN),
    ),
    _type("org.httprpc.sierra.StackPanel", "org.httprpc.sierra.LayoutPanel"),
    _type("org.httprpc.sierra.Spacer", "javax.swing.JComponent"),
    _type(
        "org.httprpc.sierra.TextPane",
        "javax.swing.JComponent",
        ("text", _T.STRING),
        ("horizontalAlignment", _T.ENUM, HORIZONTAL_ALIGNMENT.key),
        ("verticalAlignment", _T.ENUM, VERTICAL_ALIGNMENT.key),
        ("wrapText", _T.BOOLEAN),
    ),
    _type(
        "org.httprpc.sierra.ImagePane",
        "javax.swing.JComponent",
        ("image", _T.IMAGE),
        ("horizontalAlignment", _T.ENUM, HORIZONTAL_ALIGNMENT.key),
        ("verticalAlignment", _T.ENUM, VERTICAL_ALIGNMENT.key),
        ("scaleToFit", _T.BOOLEAN),
    ),
    _type(
        "org.httprpc.sierra.MenuButton",
        "javax.swing.JButton",
        ("popupMenu", _T.OBJECT),
    ),
    _type(
        "org.httprpc.sierra.Picker",
        "javax.swing.JTextField",
        ("popupHorizontalAlignment", _T.ENUM, HORIZONTAL_ALIGNMENT.key),
        ("popupVerticalAlignment", _T.ENUM, VERTICAL_ALIGNMENT.key),
    ),
    _type("org.httprpc.sierra.TemporalPicker", "org.httprpc.sierra.Picker"),
    _type(
        "org.httprpc.sierra.DatePicker",
        "org.httprpc.sierra.TemporalPicker",
        ("date", _T.OBJECT),
        ("minimumDate", _T.OBJECT),
        ("maximumDate", _T.OBJECT),
    ),
    _type(
        "org.httprpc.sierra.TimePicker",
        "org.httprpc.sierra.TemporalPicker",
        ("time", _T.OBJECT),
        ("minimumTime", _T.OBJECT),
        ("maximumTime", _T.OBJECT),
    ),
    _type(
        "org.httprpc.sierra.SuggestionPicker",
        "org.httprpc.sierra.Picker",
        ("suggestions", _T.OBJECT),
        ("maximumRowCount", _T.INT),
    ),
    _type("org.httprpc.sierra.ActivityIndicator", "javax.swing.JComponent"),
    _type(
        "org.httprpc.sierra.NumberField",
        "javax.swing.JTextField",
        ("value", _T.NUMBER),
        ("format", _T.OBJECT),
    ),
    _type(
        "org.httprpc.sierra.ValidatedTextField",
        "javax.swing.JTextField",
        ("value", _T.STRING),
        ("pattern", _T.STRING),
    ),
    _type(
        "org.httprpc.sierra.ChartPane",
        "javax.swing.JComponent",
        ("chart", _T.OBJECT),
    ),
)

BUILTIN_TYPES: tuple[TypeNode, ...] = _SWING_TYPES + _SIERRA_TYPES

BUILTIN_BINDINGS: tuple[tuple[str, str], ...] = (
    ("label", "javax.swing.JLabel"),
    ("button", "javax.swing.JButton"),
    ("toggle-button", "javax.swing.JToggleButton"),
    ("radio-button", "javax.swing.JRadioButton"),
    ("check-box", "javax.swing.JCheckBox"),
    ("text-field", "javax.swing.JTextField"),
    ("password-field", "javax.swing.JPasswordField"),
    ("formatted-text-field", "javax.swing.JFormattedTextField"),
    ("combo-box", "javax.swing.JComboBox"),
    ("spinner", "javax.swing.JSpinner"),
    ("slider", "javax.swing.JSlider"),
    ("progress-bar", "javax.swing.JProgressBar"),
    ("separator", "javax.swing.JSeparator"),
    ("scroll-pane", "javax.swing.JScrollPane"),
    ("split-pane", "javax.swing.JSplitPane"),
    ("tabbed-pane", "javax.swing.JTabbedPane"),
    ("tool-bar", "javax.swing.JToolBar"),
    ("menu-bar", "javax.swing.JMenuBar"),
    ("menu", "javax.swing.JMenu"),
    ("menu-item", "javax.swing.JMenuItem"),
    ("check-box-menu-item", "javax.swing.JCheckBoxMenuItem"),
    ("radio-button-menu-item", "javax.swing.JRadioButtonMenuItem"),
    ("list", "javax.swing.JList"),
    ("table", "javax.swing.JTable"),
    ("tree", "javax.swing.JTree"),
    ("text-area", "javax.swing.JTextArea"),
    ("editor-pane", "javax.swing.JEditorPane"),
    ("color-chooser", "javax.swing.JColorChooser"),
    ("row-panel", "org.httprpc.sierra.RowPanel"),
    ("column-panel", "org.httprpc.sierra.ColumnPanel"),
    ("stack-panel", "org.httprpc.sierra.StackPanel"),
    ("spacer", "org.httprpc.sierra.Spacer"),
    ("text-pane", "org.httprpc.sierra.TextPane"),
    ("image-pane", "org.httprpc.sierra.ImagePane"),
    ("menu-button", "org.httprpc.sierra.MenuButton"),
    ("date-picker", "org.httprpc.sierra.DatePicker"),
    ("time-picker", "org.httprpc.sierra.TimePicker"),
    ("suggestion-picker", "org.httprpc.sierra.SuggestionPicker"),
    ("activity-indicator", "org.httprpc.sierra.ActivityIndicator"),
    ("number-field", "org.httprpc.sierra.NumberField"),
    ("validated-text-field", "org.httprpc.sierra.ValidatedTextField"),
    ("chart-pane", "org.httprpc.sierra.ChartPane"),
)


# === REGISTRY ===


class TypeRegistry:
    """Explicit tag/type registry.

    Holds the type table, the enum domain table and the ordered tag
    bindings. Lookups that miss the local tables are delegated to an
    optional fallback resolver (e.g. a plugin loader) and cached.

    Example:
        >>> registry = TypeRegistry(BUILTIN_TYPES, BUILTIN_DOMAINS)
        >>> registry.bind("button", "javax.swing.JButton")
        >>> registry.tags()
        ['button']
    """

    def __init__(
        self,
        types: Iterable[TypeNode] = (),
        domains: Iterable[EnumDomain] = (),
        fallback: TypeResolver | None = None,
    ):
        self._types: dict[str, TypeNode] = {}
        self._domains: dict[str, EnumDomain] = {}
        self._bindings: dict[str, str] = {}
        self.fallback = fallback

        for node in types:
            self.register_type(node)
        for domain in domains:
            self.register_domain(domain)

    # --- tables ---

    def register_type(self, node: TypeNode) -> None:
        """Add or replace a type in the table."""
        if node.identity == ROOT_TYPE:
            raise ValueError(f"'{ROOT_TYPE}' is implicit and cannot be registered")
        if node.base is None:
            raise ValueError(f"Type '{node.identity}' must declare a base type")
        self._types[node.identity] = node

    def register_domain(self, domain: EnumDomain) -> None:
        """Add or replace an enum domain."""
        self._domains[domain.key] = domain

    def resolve(self, identity: str) -> TypeNode:
        """Resolve a type identity.

        Raises:
            UnresolvedTypeError: If neither the table nor the fallback
                resolver knows the identity.
        """
        node = self._types.get(identity)
        if node is not None:
            return node
        if self.fallback is not None:
            node = self.fallback.resolve(identity)
            self._types[identity] = node
            return node
        raise UnresolvedTypeError(identity)

    def resolve_domain(self, key: str) -> EnumDomain:
        """Resolve an enum domain by key."""
        domain = self._domains.get(key)
        if domain is not None:
            return domain
        if self.fallback is not None:
            domain = self.fallback.resolve_domain(key)
            self._domains[key] = domain
            return domain
        raise UnresolvedTypeError(key, "enum domain")

    def types(self) -> list[TypeNode]:
        """Types currently held in the local table."""
        return list(self._types.values())

    # --- bindings ---

    def bind(self, tag: str, identity: str) -> None:
        """Associate a markup tag with a type.

        Rebinding an existing tag replaces its type but keeps its position.

        Raises:
            ValueError: If the tag is not a valid grammar name.
            UnresolvedTypeError: If the type cannot be resolved.
        """
        if not re.fullmatch(NAME_PATTERN, tag):
            raise ValueError(f"Invalid tag: {tag!r}")
        self.resolve(identity)
        self._bindings[tag] = identity

    def tags(self) -> list[str]:
        """Bound tags in binding order."""
        return list(self._bindings)

    @property
    def bindings(self) -> Mapping[str, str]:
        """Read-only view of tag -> type identity."""
        return MappingProxyType(self._bindings)

    def type_for(self, tag: str) -> TypeNode:
        """Type bound to a tag."""
        try:
            identity = self._bindings[tag]
        except KeyError:
            raise KeyError(f"Unknown tag: {tag}") from None
        return self.resolve(identity)

    # --- hierarchy ---

    def lineage(self, identity: str) -> list[TypeNode]:
        """A type followed by its ancestors, excluding the root.

        Raises:
            UnresolvedTypeError: If any ancestor cannot be resolved.
            ValueError: If the ancestor chain loops.
        """
        chain: list[TypeNode] = []
        seen: set[str] = set()
        current = identity
        while current != ROOT_TYPE:
            if current in seen:
                raise ValueError(f"Inheritance cycle detected at '{current}'")
            seen.add(current)
            node = self.resolve(current)
            chain.append(node)
            current = node.base
        return chain

    def depth(self, identity: str) -> int:
        """Number of steps from a type to the root."""
        return len(self.lineage(identity))

    def is_subtype(self, identity: str, ancestor: str) -> bool:
        """True if a type is, or descends from, the given ancestor."""
        return any(node.identity == ancestor for node in self.lineage(identity))


def default_registry(fallback: TypeResolver | None = None) -> TypeRegistry:
    """Build a fresh registry holding the built-in types and tags.

    Args:
        fallback: Optional resolver consulted for unknown identities.

    Returns:
        A new TypeRegistry; callers own it and may extend it freely.
    """
    registry = TypeRegistry(BUILTIN_TYPES, BUILTIN_DOMAINS, fallback=fallback)
    for tag, identity in BUILTIN_BINDINGS:
        registry.bind(tag, identity)
    return registry


__all__ = [
    # Enums
    "ValueKind",
    "PropertyType",
    "ContentModel",
    # Data model
    "EnumConstant",
    "EnumDomain",
    "PropertyDef",
    "TypeNode",
    "AttributeDeclaration",
    "ElementDeclaration",
    "TypeResolver",
    "UnresolvedTypeError",
    # Vocabulary
    "ROOT_TYPE",
    "NAME_PATTERN",
    "BASE_FRAGMENT",
    "BASE_ATTRIBUTES",
    "BOOLEAN_TOKENS",
    "TEXT_INPUT_TYPE",
    "TEXT_INPUT_ATTRIBUTES",
    "CONTAINER_TYPES",
    "SELECTOR_ATTRIBUTES",
    "TEXT_PROPERTY_TYPES",
    "SELECTOR_PROPERTY_TYPES",
    "BUILTIN_DOMAINS",
    "BUILTIN_TYPES",
    "BUILTIN_BINDINGS",
    # Registry
    "TypeRegistry",
    "default_registry",
]
