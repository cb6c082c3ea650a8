def hit(t, a, r=20.0, cx=100.0, cy=100.0, tx=102.0, ty=98.0, d=2.83):
    return {"t": t, "cx": cx, "cy": cy, "tx": tx, "ty": ty, "r": r, "d": d, "hit": True, "a": a}


def miss(t, r=10.0):
    return {"t": t, "cx": 10.0, "cy": 10.0, "tx": 200.0, "ty": 200.0, "r": r, "d": 268.7, "hit": False}


def submission(total_hits, accuracies, duration_ms=None, step_ms=1500, with_miss=False, **stats):
    """Consistent stats + click logs for ``total_hits`` hits."""

    logs = [hit((i + 1) * step_ms, a) for i, a in enumerate(accuracies)]
    last = len(logs) * step_ms
    if with_miss:
        last += step_ms
        logs.append(miss(last))
    avg = sum(accuracies) / len(accuracies) if accuracies else 0.0
    body_stats = {
        "totalHits": total_hits,
        "avgAccuracy": avg,
        "bestAccuracy": max(accuracies, default=0.0),
        "finalRadius": 10,
        "durationMs": last if duration_ms is None else duration_ms,
    }
    body_stats.update(stats)
    return {"stats": body_stats, "click_logs": logs}
