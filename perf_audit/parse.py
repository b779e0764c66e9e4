import re
from typing import Any, Dict, List, Optional

IMAGE_EXT  = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg|avif)$")
SCRIPT_EXT = re.compile(r"\.(js|mjs)$")
STYLE_EXT  = re.compile(r"\.(css)$")
FONT_EXT   = re.compile(r"\.(woff|woff2|ttf|otf|eot)$")


def _num(v) -> Optional[float]:
    # bool is an int subclass, Lighthouse never means it as a measurement
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return v

def _dict(v) -> dict:
    return v if isinstance(v, dict) else {}

def _metric(audits, key):
    return _num(_dict(audits.get(key)).get("numericValue"))

def _first_metric(audits, *keys):
    for key in keys:
        v = _metric(audits, key)
        if v is not None:
            return v
    return None

def _items(audits, key) -> Optional[List[Any]]:
    details = _dict(_dict(audits.get(key)).get("details"))
    items = details.get("items")
    return items if isinstance(items, list) else None

def _nav_timing(lhr, key):
    nav = _dict(_dict(lhr.get("timing")).get("navigation"))
    return _num(nav.get(key))


def _size(item) -> Optional[float]:
    # missing or null transferSize counts as 0, anything else non-numeric is None
    size = item.get("transferSize")
    if size is None:
        return 0
    return _num(size)

def _empty_breakdown() -> Dict[str, float]:
    return {"imageSize": 0, "scriptSize": 0, "stylesheetSize": 0, "fontSize": 0}

def _bucket_for_type(resource_type: str) -> Optional[str]:
    t = resource_type.lower()
    if "image" in t:
        return "imageSize"
    if "script" in t or "javascript" in t:
        return "scriptSize"
    if "stylesheet" in t or "css" in t:
        return "stylesheetSize"
    if "font" in t:
        return "fontSize"
    return None

def _bucket_for_url(url: str) -> Optional[str]:
    u = url.lower()
    if IMAGE_EXT.search(u):
        return "imageSize"
    if SCRIPT_EXT.search(u):
        return "scriptSize"
    if STYLE_EXT.search(u):
        return "stylesheetSize"
    if FONT_EXT.search(u):
        return "fontSize"
    return None

def breakdown_from_summary(audits) -> Optional[Dict[str, float]]:
    """
    Sum transferSize per resource type from the resource-summary audit.
    Returns None when the audit is missing or an item can't be summed,
    so the caller can fall back to the request list.
    """
    items = _items(audits, "resource-summary")
    if items is None:
        return None
    out = _empty_breakdown()
    for item in items:
        if not isinstance(item, dict):
            return None
        size = _size(item)
        if size is None:
            return None
        rtype = item.get("resourceType")
        bucket = _bucket_for_type(rtype) if isinstance(rtype, str) else None
        if bucket:
            out[bucket] += size
    return out

def breakdown_from_requests(audits) -> Dict[str, float]:
    """Classify network-requests items by URL file extension."""
    out = _empty_breakdown()
    for req in _items(audits, "network-requests") or []:
        if not isinstance(req, dict):
            continue
        url = req.get("url")
        size = _size(req)
        bucket = _bucket_for_url(url) if isinstance(url, str) else None
        if bucket and size is not None:
            out[bucket] += size
    return out

def resource_breakdown(audits) -> Dict[str, float]:
    summary = breakdown_from_summary(audits)
    if summary is not None:
        return summary
    return breakdown_from_requests(audits)


def _lighthouse_score(lhr):
    perf = _dict(_dict(lhr.get("categories")).get("performance"))
    score = _num(perf.get("score"))
    if score is None:
        return None
    # JS-style half-up rounding, Python's round() is banker's
    return int(score * 100 + 0.5)


def metrics_from_lhr(lhr: dict) -> Dict[str, Any]:
    """
    Pull the fixed metric set out of a Lighthouse result (LHR).

    Missing or malformed parts of the report degrade to None for that
    metric (0 for request counts and byte sizes). Never raises.
    """
    lhr = _dict(lhr)
    audits = _dict(lhr.get("audits"))
    breakdown = resource_breakdown(audits)

    return {
        "coreWebVitals": {
            "largestContentfulPaint": _metric(audits, "largest-contentful-paint"),
            "firstContentfulPaint":   _metric(audits, "first-contentful-paint"),
            "cumulativeLayoutShift":  _metric(audits, "cumulative-layout-shift"),
            "firstInputDelay":        _first_metric(audits, "max-potential-fid", "first-input-delay"),
            "interactionToNextPaint": _metric(audits, "interaction-to-next-paint"),
        },
        "loadingMetrics": {
            "timeToFirstByte":   _metric(audits, "server-response-time"),
            "domContentLoaded":  _nav_timing(lhr, "domContentLoadedEventEnd"),
            "loadComplete":      _nav_timing(lhr, "loadEventEnd"),
            "timeToInteractive": _metric(audits, "interactive"),
            "totalBlockingTime": _metric(audits, "total-blocking-time"),
            "speedIndex":        _metric(audits, "speed-index"),
        },
        "resourceMetrics": {
            "totalRequests":     len(_items(audits, "network-requests") or []),
            "totalTransferSize": _metric(audits, "total-byte-weight") or 0,
            **breakdown,
        },
        "lighthouseScore": _lighthouse_score(lhr),
    }
