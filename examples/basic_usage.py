"""
Cayley Python SDK - Basic Usage Example

This example demonstrates the core features of the Cayley Python SDK against
a Cayley server loaded with the sample social graph (testdata.nq):
- Connecting to a database
- Building and executing query paths
- Saving and following morphisms
- Running raw query strings
- Typed result deserialization

Run with: python3 examples/basic_usage.py
Point it elsewhere with CAYLEY_HOST / CAYLEY_PORT.
"""

import logging
from dataclasses import dataclass

from cayley_sdk import (
    CayleyError,
    Graph,
    Morphism,
    Node,
    Predicate,
    Tag,
    Vertex,
)


@dataclass
class Follower:
    """Follower row for typed deserialization"""
    id: str


def main() -> int:
    """Run the basic usage example"""
    logging.basicConfig(level=logging.INFO)
    print("=== Cayley SDK Basic Usage Example ===\n")

    # 1. Connect
    print("1. Connecting...")
    graph = Graph.from_settings()
    print(f"   Using endpoint {graph.url}\n")

    try:
        # 2. Build and run a query path
        print("2. Who does C follow?")
        query = Vertex.start(Node("C")).out(Predicate("follows")).all()
        print(f"   Query: {query.compile()}")
        nodes = graph.find(query)
        for row in nodes:
            print(f"   - {row['id']}")
        print()

        # 3. Tag and save
        print("3. Who follows whom, starting from D and B...")
        query = (Vertex.start(Node("D")).as_(Tag("source"))
                 .save(Predicate("follows"), Tag("target")).all())
        for row in graph.find(query):
            print(f"   - {row.get('source')} -> {row.get('target')}")
        print()

        # 4. Morphisms
        print("4. Saving and following a morphism...")
        friend_of_friend = (Morphism.start("friendOfFriend")
                            .out(Predicate("follows"))
                            .out(Predicate("follows")))
        graph.save(friend_of_friend)
        nodes = graph.find(Vertex.start(Node("C")).follow(friend_of_friend)
                           .has(Predicate("status"), Node("cool_person")).all())
        print(f"   Cool friends of friends of C: {nodes.ids()}\n")

        # 5. Raw query string
        print("5. Running a raw query...")
        nodes = graph.exec('g.V("cool_person").In("status").All()')
        print(f"   Cool people: {nodes.ids()}\n")

        # 6. Typed deserialization
        print("6. Using typed deserialization...")
        followers = graph.find(Vertex.start(Node("B")).in_(Predicate("follows")).all())
        for follower in followers.deserialize_rows(Follower):
            print(f"   - {follower}")
        print()

        print("=== Example completed successfully ===")
        return 0

    except CayleyError as e:
        print(f"\n[ERROR] Cayley Error: {e}")
        return 1

    finally:
        graph.close()


if __name__ == "__main__":
    exit(main())
