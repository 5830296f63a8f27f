from __future__ import annotations

import copy
import dataclasses
from collections import OrderedDict

from . import constants, h, t
from . import messages as m


@dataclasses.dataclass
class InheritedFieldGroup:
    typeName: str
    # Detached copy of the heading that names the type.
    heading: t.ElementT
    fields: list[t.ElementT] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class EventFields:
    own: list[t.ElementT] = dataclasses.field(default_factory=list)
    inherited: OrderedDict[str, InheritedFieldGroup] = dataclasses.field(default_factory=OrderedDict)

    def __bool__(self) -> bool:
        return bool(self.own or self.inherited)

    def allFields(self) -> list[t.ElementT]:
        fields = []
        for group in self.inherited.values():
            fields.extend(group.fields)
        fields.extend(self.own)
        return fields


def isEventMarker(el: t.ElementT) -> bool:
    return h.textContent(el).strip().startswith(constants.eventPrefix)


def isField(el: t.ElementT) -> bool:
    return h.hasClass(el, constants.fieldClass)


def isInheritedContainer(el: t.ElementT) -> bool:
    return h.hasClass(el, constants.inheritedFieldsClass)


def eventMarkers(context: t.PageT | t.ElementT) -> list[t.ElementT]:
    return [el for el in h.findAll(constants.identifierSel, context) if isEventMarker(el)]


def enclosingField(marker: t.ElementT, doc: t.PageT) -> t.ElementT | None:
    field = h.closestAncestor(marker, isField)
    if field is None:
        name = h.textContent(marker).strip()
        m.die(f"In {doc.inputFilename}, found the event identifier '{name}' outside of any field.", el=marker)
    return field


def inheritedFrom(field: t.ElementT, container: t.ElementT, doc: t.PageT) -> tuple[str, t.ElementT] | None:
    """
    Finds the type an inherited field was inherited from.

    That's named by the closest heading preceding the field
    (inside the inherited-fields container),
    whose type element carries the full type name in its title.
    Returns the type name and the heading,
    or None if the page doesn't follow that structure.
    """
    heading = next(h.scopingElements(field, [constants.typeHeadingTag], within=container), None)
    if heading is None:
        m.die(
            f"In {doc.inputFilename}, couldn't find the heading naming the type an inherited event comes from.",
            el=field,
        )
        return None
    typeEl = h.find(constants.typeSel, heading)
    if typeEl is None or typeEl.get("title") is None:
        m.die(
            f"In {doc.inputFilename}, the heading of an inherited event doesn't name its type with a title.",
            el=heading,
        )
        return None
    return typeEl.get("title", "").strip(), heading


def extractEventFields(doc: t.PageT) -> EventFields:
    eventFields = EventFields()

    # Inherited events first, so the second pass only sees the page's own ones.
    for container in h.findAll(constants.inheritedFieldsSel, doc):
        for marker in eventMarkers(container):
            field = enclosingField(marker, doc)
            if field is None or field.getparent() is None:
                # Broken, or a second marker in a field we already took.
                continue
            source = inheritedFrom(field, container, doc)
            if source is None:
                continue
            typeName, heading = source
            if typeName not in eventFields.inherited:
                headingCopy = copy.deepcopy(heading)
                headingCopy.tail = None
                eventFields.inherited[typeName] = InheritedFieldGroup(typeName, headingCopy)
            eventFields.inherited[typeName].fields.append(h.removeNode(field))

    ownMarkers = [marker for marker in eventMarkers(doc) if not h.hasAncestor(marker, isInheritedContainer)]
    if ownMarkers and h.find(constants.mainBodySel, doc) is None:
        # Nowhere to put them, so leave them where they are.
        m.die(f"In {doc.inputFilename}, found events, but no '{constants.mainBodySel}' element to put them after.")
        return eventFields
    for marker in ownMarkers:
        field = enclosingField(marker, doc)
        if field is None or field.getparent() is None:
            continue
        eventFields.own.append(h.removeNode(field))

    return eventFields


def stripEventPrefix(markup: str) -> str:
    return markup.replace(constants.eventPrefix, "")


def withoutEventPrefix(el: t.ElementT) -> t.ElementT:
    # The prefix can show up in ids, hrefs, and text alike,
    # so scrub the serialized markup and parse it back in.
    return h.parseElement(stripEventPrefix(h.Serializer().serializeFragment(el)))


def sectionHeading(text: str) -> t.ElementT:
    return h.createElement("h3", {"class": "section"}, text)


def fieldsContainer(children: list[t.ElementT]) -> t.ElementT:
    container = h.createElement("div", {"class": "fields"})
    container.extend(children)
    return container


def addEventSections(doc: t.PageT, eventFields: EventFields) -> None:
    if eventFields.inherited:
        container = h.find(constants.inheritedFieldsSel, doc)
        assert container is not None
        # Each type's heading, followed by the events it contributed.
        children: list[t.ElementT] = []
        for group in eventFields.inherited.values():
            children.append(group.heading)
            children.extend(group.fields)
        h.prependChild(
            container,
            sectionHeading(constants.inheritedEventsHeading),
            withoutEventPrefix(fieldsContainer(children)),
        )

    if eventFields.own:
        mainEl = h.find(constants.mainBodySel, doc)
        assert mainEl is not None
        h.insertAfter(
            mainEl,
            sectionHeading(constants.eventsHeading),
            withoutEventPrefix(fieldsContainer(eventFields.own)),
        )


def processEvents(doc: t.PageT) -> EventFields:
    eventFields = extractEventFields(doc)
    if eventFields:
        addEventSections(doc, eventFields)
    return eventFields
