"""
Cayley SDK - Python client for the Cayley graph database

This package builds Cayley's Gremlin-style queries from typed path builders,
sends them to a running database over HTTP and decodes the JSON replies into
rows.

Quick Start
-----------

```python
from cayley_sdk import Graph, Vertex, Morphism, Node, Predicate, Tag

graph = Graph.default()

# Find who C follows
nodes = graph.find(Vertex.start(Node("C")).out(Predicate("follows")).all())
for row in nodes:
    print(row["id"])

# Save a morphism and reuse it by name
friend_of_friend = (Morphism.start("friendOfFriend")
    .out(Predicate("follows"))
    .out(Predicate("follows")))
graph.save(friend_of_friend)
graph.find(Vertex.start(Node("C")).follow(friend_of_friend)
           .has(Predicate("status"), Node("cool_person")).all())
```

Architecture
-----------

```
Your Application
       │
       ▼
┌─────────────────────────────────────────┐
│  Cayley SDK (this package)              │
│  - Vertex / Morphism (path builders)    │
│  - Selectors (typed arguments)          │
│  - Graph (find, exec, save)             │
│  - GraphNodes (decoded rows)            │
└─────────────────────────────────────────┘
       │  query text / JSON envelope
       ▼
┌─────────────────────────────────────────┐
│  HttpTransport (httpx)                  │
│  POST /api/v1/query/gremlin             │
└─────────────────────────────────────────┘
       │
       ▼
┌─────────────────────────────────────────┐
│  Cayley server                          │
└─────────────────────────────────────────┘
```
"""

from .error import (
    CayleyError,
    InvalidUrlError,
    MalformedRequestError,
    RequestFailedError,
    ResponseParseError,
    DecodingError,
    SerializationError,
    QueryNotFinalizedError,
    QueryCompilationError,
    PathFinalizedError,
    ReusableCannotBeSavedError,
    MorphismNotSavedError,
)
from .selector import (
    AnyNode,
    Node,
    Nodes,
    AnyTag,
    Tag,
    Tags,
    AnyPredicate,
    Predicate,
    Predicates,
    FromQuery,
)
from .query import Path, Query, Vertex
from .morphism import Reusable, Morphism
from .result import GraphNode, GraphNodes, decode_nodes
from .transport import APIVersion, HttpTransport
from .config import CayleySettings
from .connection import Graph

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "CayleySettings",
    "APIVersion",
    "HttpTransport",
    "Path",
    "Query",
    "Vertex",
    "Reusable",
    "Morphism",
    "AnyNode",
    "Node",
    "Nodes",
    "AnyTag",
    "Tag",
    "Tags",
    "AnyPredicate",
    "Predicate",
    "Predicates",
    "FromQuery",
    "GraphNode",
    "GraphNodes",
    "decode_nodes",
    "CayleyError",
    "InvalidUrlError",
    "MalformedRequestError",
    "RequestFailedError",
    "ResponseParseError",
    "DecodingError",
    "SerializationError",
    "QueryNotFinalizedError",
    "QueryCompilationError",
    "PathFinalizedError",
    "ReusableCannotBeSavedError",
    "MorphismNotSavedError",
]
