import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from graphcompose.adapters import line_item_graph  # noqa: E402
from graphcompose.graph.graph_composition import GraphComposition  # noqa: E402
from graphcompose.graph.graph_query import GraphQueryEngine  # noqa: E402
from graphcompose.graph.graph_schema import RelationshipType  # noqa: E402
from graphcompose.persistence import to_dict  # noqa: E402

from backend.app.config import AppConfig  # noqa: E402


def main() -> None:
    config = AppConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger = logging.getLogger("graphcompose.run")

    policy = config.composition
    validate = GraphComposition.composite("ValidateOrder", config=policy)
    price = GraphComposition.composite("CalculatePricing", config=policy)
    inventory = GraphComposition.composite("CheckInventory", config=policy)
    payment = GraphComposition.composite("VerifyPayment", config=policy)

    workflow = validate.then(price).then(inventory.parallel(payment))
    order = line_item_graph("widget", 3, 2.5).compose(
        workflow, RelationshipType.DEPENDS_ON
    )

    engine = GraphQueryEngine(order)
    logger.info("preorder: %s", [n.label for n in engine.preorder()])
    logger.info("roots: %s", engine.labels(engine.roots()))
    logger.info("leaves: %s", engine.labels(engine.leaves()))
    logger.info(json.dumps(to_dict(order), indent=2, default=str))


if __name__ == "__main__":
    main()
