# osmpp/app/build.py
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from osmpp.config.models import RunModel
from osmpp.core.correlator import TurningCorrelator
from osmpp.core.stats import RunStats
from osmpp.core.synthesizer import NodeIdCounter
from osmpp.domain.entities import Entity
from osmpp.io.run_logging import RunLogging  # JSON logs
from osmpp.io.sink import OsmXmlSink, Sink
from osmpp.io.source import read_entities
from osmpp.pipeline.driver import Pipeline
from osmpp.pipeline.hooks import NoopHooks


@dataclass
class App:
    config: RunModel
    sink: Sink
    counter: NodeIdCounter
    correlator: TurningCorrelator
    pipeline: Pipeline

    def run(self, entities: Iterable[Entity] | None = None) -> RunStats:
        """Run over `entities`, or over the configured input file when None."""
        if entities is None:
            entities = read_entities(self.config.input_osm)
        # the pipeline closes the sink; __exit__ only releases it on error
        with self.sink:
            return self.pipeline.run(entities)


def build(
    cfg: RunModel | Mapping, *, sink: Sink | None = None, use_logging: bool = True
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RunModel) else RunModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        RunLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Output, id counter, correlation table
    sink = sink if sink is not None else OsmXmlSink(model.output_nodes, generator=model.generator)
    counter = NodeIdCounter(model.start_node)
    correlator = TurningCorrelator()

    # 3) Pipeline (inject deps explicitly)
    pipeline = Pipeline(sink=sink, counter=counter, hooks=hooks, correlator=correlator)

    return App(model, sink, counter, correlator, pipeline)
