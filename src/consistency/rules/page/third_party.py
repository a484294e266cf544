from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, truncate

HOSTS_PREVIEW_LENGTH = 200


@audit_spec(categories=["Performance: Third Parties"])
def check_third_party_surface_area(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    res = []
    resources = snapshot.third_party_resources
    if resources is None:
        return res

    if len(resources) > thresholds.third_party_origin_count:
        hosts = ", ".join(tp.host for tp in resources)
        res.append(Issue(
            severity=Severity.WARNING,
            category="Performance: Third Parties",
            message=f"{len(resources)} third-party origins found on this page",
            detail=(
                f"Third-party hosts: {truncate(hosts, HOSTS_PREVIEW_LENGTH)}. Each additional origin adds "
                "DNS/connection overhead and may impact performance."
            ),
            url=snapshot.url,
        ))
    return res
