"""Demonstration of dependency tracking with structured logging.

This example builds a small package graph, shows how a graph that forbids
cycles rejects a cycle-closing edge, and reports the cycles of a graph that
allows them.
"""

import sys
from pathlib import Path

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from depgraph.config import DepGraphConfig, GraphConfig, LoggingConfig, configure_logging_from
from depgraph.graph import DependencyGraph, GraphValidator, KeyComparer
from depgraph.log_config import bind_correlation_id, get_logger, unbind_correlation_id


def demonstrate_strict_graph(config: DepGraphConfig) -> None:
    """Build a package graph that refuses cycles."""
    logger = get_logger(__name__)

    graph = DependencyGraph.from_config(config.graph, comparer=KeyComparer(str.casefold))
    graph.add_dependency("web-app", "http-client")
    graph.add_dependency("http-client", "TLS")
    graph.add_dependency("web-app", "logging")

    logger.info(
        "package_dependencies",
        package="web-app",
        direct=sorted(graph.get_direct_dependencies("web-app")),
        all=sorted(graph.get_all_dependencies("web-app")),
    )

    accepted = graph.add_dependency("tls", "Web-App")
    logger.info("cycle_closing_edge", accepted=accepted, has_cyclic=graph.has_cyclic())


def demonstrate_cycle_report() -> None:
    """Report the cycles of a graph that allows them."""
    logger = get_logger(__name__)

    graph = DependencyGraph(allow_cyclic=True)
    graph.add_dependency("scheduler", "worker")
    graph.add_dependency("worker", "queue")
    graph.add_dependency("queue", "scheduler")

    report = GraphValidator().validate(graph)
    logger.info("validation_finished", is_valid=report.is_valid)
    print(report.summary())


def main() -> None:
    """Main demonstration function."""
    config = DepGraphConfig(
        graph=GraphConfig(allow_cyclic=False),
        logging=LoggingConfig(level="DEBUG", json_logs=False),
    )
    configure_logging_from(config)

    bind_correlation_id("demo-1")
    try:
        demonstrate_strict_graph(config)
        demonstrate_cycle_report()
    finally:
        unbind_correlation_id()


if __name__ == "__main__":
    main()
