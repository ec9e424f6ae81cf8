# ABOUTME: Components package for shared framework machinery
# ABOUTME: Holds the middleware registry, spec builder and instrumentation helpers
