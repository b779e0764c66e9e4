from __future__ import annotations
from types import MappingProxyType
from typing import Mapping

# Prewritten impact / fix text per metric name.
# Unknown metrics (new config entries) get the fallbacks below.
DEFAULT_IMPACT = "Affects overall performance"
DEFAULT_REC    = "Review and optimize this metric"

TEMPLATES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "largestContentfulPaint": MappingProxyType({
        "impact": "Affects perceived load time and user experience",
        "rec":    "Optimize images, use CDN, implement lazy loading, optimize server response time",
    }),
    "firstContentfulPaint": MappingProxyType({
        "impact": "Affects initial page render perception",
        "rec":    "Minimize render-blocking resources, optimize CSS delivery, reduce server response time",
    }),
    "cumulativeLayoutShift": MappingProxyType({
        "impact": "Causes visual instability and poor user experience",
        "rec":    "Set explicit dimensions for images/videos, avoid inserting content above existing content, use font-display: swap",
    }),
    "firstInputDelay": MappingProxyType({
        "impact": "Affects interactivity and responsiveness",
        "rec":    "Reduce JavaScript execution time, break up long tasks, optimize third-party scripts",
    }),
    "interactionToNextPaint": MappingProxyType({
        "impact": "Affects perceived responsiveness after user interaction",
        "rec":    "Optimize event handlers, reduce JavaScript execution, use web workers for heavy tasks",
    }),
    "timeToFirstByte": MappingProxyType({
        "impact": "Indicates server response time issues",
        "rec":    "Improve server response time, use CDN, enable compression, optimize database queries",
    }),
    "domContentLoaded": MappingProxyType({
        "impact": "Affects when page becomes interactive",
        "rec":    "Reduce render-blocking resources, optimize JavaScript execution",
    }),
    "loadComplete": MappingProxyType({
        "impact": "Affects full page load time",
        "rec":    "Optimize resource loading, reduce total transfer size, implement resource prioritization",
    }),
    "timeToInteractive": MappingProxyType({
        "impact": "Affects when page becomes fully interactive",
        "rec":    "Reduce JavaScript execution time, minimize main thread work, optimize third-party scripts",
    }),
    "totalBlockingTime": MappingProxyType({
        "impact": "Affects page responsiveness during load",
        "rec":    "Break up long tasks, defer non-critical JavaScript, optimize third-party scripts",
    }),
    "speedIndex": MappingProxyType({
        "impact": "Affects visual completeness perception",
        "rec":    "Optimize above-the-fold content, reduce render-blocking resources, improve server response time",
    }),
    "totalRequests": MappingProxyType({
        "impact": "High number of requests increases load time",
        "rec":    "Combine files, use HTTP/2, implement resource bundling, reduce third-party requests",
    }),
    "totalTransferSize": MappingProxyType({
        "impact": "Large transfer size increases load time, especially on slow connections",
        "rec":    "Enable compression (gzip/brotli), minify resources, remove unused code, optimize images",
    }),
    "imageSize": MappingProxyType({
        "impact": "Large images significantly impact load time",
        "rec":    "Compress images, use modern formats (WebP/AVIF), implement responsive images, use lazy loading",
    }),
    "scriptSize": MappingProxyType({
        "impact": "Large JavaScript files block rendering and increase parse time",
        "rec":    "Code splitting, tree shaking, minification, remove unused code, defer non-critical scripts",
    }),
    "stylesheetSize": MappingProxyType({
        "impact": "Large CSS files block rendering",
        "rec":    "Remove unused CSS, minify CSS, split CSS by page, inline critical CSS",
    }),
    "fontSize": MappingProxyType({
        "impact": "Large font files can cause FOIT/FOUT issues",
        "rec":    "Subset fonts, use font-display: swap, preload critical fonts, consider system fonts",
    }),
})


def impact_for(metric: str) -> str:
    tpl = TEMPLATES.get(metric)
    return tpl["impact"] if tpl else DEFAULT_IMPACT

def recommendation_for(metric: str) -> str:
    tpl = TEMPLATES.get(metric)
    return tpl["rec"] if tpl else DEFAULT_REC
