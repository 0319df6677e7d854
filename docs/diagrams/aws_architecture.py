#!/usr/bin/env python3
"""Generate AWS architecture diagrams for the todos stack.

This script uses the `diagrams` library to draw the two deployable units
and how the entry composition wires them together. Run it again after
changing either component.

Requirements:
    pip install -e ".[docs]"   (needs Graphviz installed)

Usage:
    python docs/diagrams/aws_architecture.py --size large

Output:
    - aws_architecture.png: Backend and frontend units and their wiring
    - request_flow.png: Browser request path through both units
"""

import argparse

from diagrams import Cluster, Diagram, Edge
from diagrams.aws.compute import Lambda
from diagrams.aws.database import Dynamodb
from diagrams.aws.management import Cloudwatch
from diagrams.aws.network import APIGateway, CloudFront
from diagrams.aws.security import IAMRole
from diagrams.aws.storage import S3
from diagrams.programming.framework import React

# Icon and font sizes (inches / points), passed through to Graphviz
SIZE_PRESETS = {
    "small": {"node": "1.0", "fontsize": "10", "title_fontsize": "16"},
    "medium": {"node": "1.5", "fontsize": "12", "title_fontsize": "20"},
    "large": {"node": "2.0", "fontsize": "14", "title_fontsize": "24"},
}

DEFAULT_SIZE = "medium"


def get_diagram_attrs(size: str = DEFAULT_SIZE) -> tuple[dict, dict]:
    """Get graph and node attributes for the given size preset."""
    preset = SIZE_PRESETS.get(size, SIZE_PRESETS[DEFAULT_SIZE])
    graph_attr = {
        "fontsize": preset["title_fontsize"],
        "bgcolor": "white",
        "pad": "0.5",
        "splines": "ortho",
    }
    node_attr = {
        "width": preset["node"],
        "height": preset["node"],
        "fontsize": preset["fontsize"],
    }
    return graph_attr, node_attr


def create_full_architecture(size: str = DEFAULT_SIZE):
    """Create the resource graph of both units."""
    graph_attr, node_attr = get_diagram_attrs(size)
    with Diagram(
        "Todos Stack - AWS Architecture",
        filename="aws_architecture",
        show=False,
        direction="LR",
        graph_attr=graph_attr,
        node_attr=node_attr,
    ):
        browser = React("Browser\n(React SPA)")

        with Cluster("Frontend unit"):
            cdn = CloudFront("CloudFront\n404 -> /index.html")
            bucket = S3("Site Bucket\n(private, OAC)")

        with Cluster("Backend unit"):
            api = APIGateway("HTTP API\nANY /{proxy+}")
            logs = Cloudwatch("Access Logs")
            function = Lambda("Todos API\n(FastAPI + Mangum)")
            role = IAMRole("Function Role\nScan/GetItem")
            table = Dynamodb("Todos Table\nhash key: id")

        browser >> cdn >> Edge(label="sigv4") >> bucket
        browser >> Edge(label="CORS: frontend URL") >> api
        api >> Edge(style="dashed") >> logs
        api >> Edge(label="AWS_PROXY") >> function
        function >> Edge(style="dotted") >> role
        role >> Edge(style="dotted") >> table
        function >> table
        cdn >> Edge(label="published URL", style="dashed", color="darkgreen") >> api


def create_request_flow(size: str = DEFAULT_SIZE):
    """Create the numbered request path of a todo list fetch."""
    graph_attr, node_attr = get_diagram_attrs(size)
    with Diagram(
        "Todo List Request Flow",
        filename="request_flow",
        show=False,
        direction="LR",
        graph_attr=graph_attr,
        node_attr=node_attr,
    ):
        browser = React("Browser")
        cdn = CloudFront("CloudFront")
        api = APIGateway("HTTP API")
        function = Lambda("Todos API")
        table = Dynamodb("Todos Table")

        browser >> Edge(label="1. GET /") >> cdn
        cdn >> Edge(label="2. index.html", style="dashed") >> browser
        browser >> Edge(label="3. GET /todos") >> api
        api >> Edge(label="4. invoke") >> function
        function >> Edge(label="5. Scan") >> table
        function >> Edge(label="6. {items, total}", style="dashed") >> browser


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate AWS architecture diagrams")
    parser.add_argument(
        "--size",
        choices=sorted(SIZE_PRESETS),
        default=DEFAULT_SIZE,
        help=f"Icon size preset (default: {DEFAULT_SIZE})",
    )
    args = parser.parse_args()

    print(f"Generating architecture diagrams (size: {args.size})...")
    create_full_architecture(args.size)
    print("✓ aws_architecture.png")
    create_request_flow(args.size)
    print("✓ request_flow.png")
