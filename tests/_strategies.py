from typing import Optional

from hypothesis.strategies import composite, integers, sampled_from

PARTITION_NAMES = ["batch", "gpu", "long", "debug"]
NODE_STATES = ["idle", "mixed", "allocated", "down*", "idle~", "mixed@", "maint"]


def sinfo_line(
    name: str = "partA",
    state: str = "up",
    nodes: int = 1,
    cores: str = "0/4/0/4",
    memory: str = "16000",
    time_limit: str = "1-00:00:00",
    default_time: str = "1:00:00",
    job_size: str = "1-infinite",
    node_state: str = "idle",
    gres: str = "(null)",
    root_only: str = "no",
    cluster: Optional[str] = "N/A",
) -> str:
    fields = [
        name,
        state,
        str(nodes),
        cores,
        memory,
        time_limit,
        default_time,
        job_size,
        node_state,
        gres,
        root_only,
    ]
    if cluster is not None:
        fields.append(cluster)
    return " ".join(fields)


@composite
def sinfo_lines(draw, min_nodes: int = 0):
    name = draw(sampled_from(PARTITION_NAMES))
    nodes = draw(integers(min_nodes, 64))
    cores_per_node = draw(integers(1, 128))
    total = nodes * cores_per_node
    allocated = draw(integers(0, total))
    memory_mb = draw(integers(1000, 2**20))
    node_state = draw(sampled_from(NODE_STATES))
    return sinfo_line(
        name=name,
        nodes=nodes,
        cores=f"{allocated}/{total - allocated}/0/{total}",
        memory=str(memory_mb),
        node_state=node_state,
    )
