from __future__ import annotations

dryRun: bool = False
docsDir: str = "docs"

# Identifiers starting with this are events masquerading as fields.
eventPrefix = "_dox_event_"

productName = "clay"
webTarget = "clay-web"
nativeTarget = "clay-native"
pluginSuffix = "-plugin"

availablePrefix = "Available on "
availableWithPrefix = "Available with "
allPlatforms = "all platforms"
allTargets = "Available on all targets"

eventsHeading = "Events"
inheritedEventsHeading = "Inherited Events"

# Page conventions of the dox html theme
sidebarDropdownSel = ".sidebar-nav > .dropdown"
identifierSel = "span.identifier"
fieldClass = "field"
inheritedFieldsClass = "inherited-fields"
inheritedFieldsSel = "." + inheritedFieldsClass
typeHeadingTag = "h4"
typeSel = ".type"
mainBodySel = ".doc.doc-main"
inlineAvailabilitySel = "p.availability em"
sectionAvailabilitySel = ".section-availability"
