from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Optional, Sequence

from ..clients.model import Client
from ..payroll.model import PayrollLine, PayrollTotals
from .model import ClientSummary, ComparisonRow, SiteSummary

SiteKey = tuple[Optional[int], str]


def _net(line: PayrollLine) -> int:
    # Lines without a computable net still count as guards.
    return line.net_salary if line.net_salary is not None else 0


def _tally(lines: Iterable[PayrollLine]) -> "OrderedDict[SiteKey, list[int]]":
    """(client_id, site_name) -> [guard_count, total_net], in first-seen order."""
    tally: "OrderedDict[SiteKey, list[int]]" = OrderedDict()
    for line in lines:
        bucket = tally.setdefault((line.client_id, line.site_name), [0, 0])
        bucket[0] += 1
        bucket[1] += _net(line)
    return tally


def group_by_client(lines: Sequence[PayrollLine]) -> list[ClientSummary]:
    names: dict[Optional[int], str] = {}
    for line in lines:
        names.setdefault(line.client_id, line.client_name)

    sites_by_client: "OrderedDict[Optional[int], list[SiteSummary]]" = OrderedDict()
    for (client_id, site_name), (count, amount) in _tally(lines).items():
        sites_by_client.setdefault(client_id, []).append(
            SiteSummary(site_name=site_name, guard_count=count, total_net=amount)
        )

    return [
        ClientSummary(
            client_id=client_id,
            client_name=names[client_id],
            guard_count=sum(s.guard_count for s in sites),
            total_net=sum(s.total_net for s in sites),
            sites=tuple(sites),
        )
        for client_id, sites in sites_by_client.items()
    ]


def compare_periods(
    current: Sequence[PayrollLine],
    previous: Sequence[PayrollLine],
    clients: Iterable[Client] = (),
) -> list[ComparisonRow]:
    """Per-site comparison over the union of sites seen in either period."""
    names: dict[Optional[int], str] = {c.client_id: c.name for c in clients}
    for line in list(current) + list(previous):
        names.setdefault(line.client_id, line.client_name)

    cur = _tally(current)
    prev = _tally(previous)
    keys = list(cur) + [k for k in prev if k not in cur]

    rows = []
    for key in keys:
        cur_count, cur_amount = cur.get(key, (0, 0))
        prev_count, prev_amount = prev.get(key, (0, 0))
        if cur_count == 0 and prev_count == 0:
            continue
        client_id, site_name = key
        rows.append(
            ComparisonRow(
                client_id=client_id,
                client_name=names.get(client_id, ""),
                site_name=site_name,
                current_employees=cur_count,
                prev_employees=prev_count,
                current_amount=cur_amount,
                prev_amount=prev_amount,
            )
        )
    return rows


def compute_totals(lines: Sequence[PayrollLine]) -> PayrollTotals:
    return PayrollTotals(
        employee_count=len(lines),
        total_gross=sum(line.gross_salary or 0 for line in lines),
        total_overtime=sum(line.overtime_pay for line in lines),
        total_deductions=sum(line.deductions + line.eobi + line.fine_adv_extra for line in lines),
        total_net=sum(_net(line) for line in lines),
    )
