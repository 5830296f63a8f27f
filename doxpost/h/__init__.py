from .dom import (
    childElements,
    closestAncestor,
    createElement,
    find,
    findAll,
    hasAncestor,
    hasClass,
    insertAfter,
    isElement,
    outerHTML,
    parseDocument,
    parseElement,
    prependChild,
    removeNode,
    scopingElements,
    setTextContent,
    textContent,
)
from .serializer import Serializer, SourceSpelling
