# Root conftest: puts the repository root on sys.path so the top-level
# packages (core, data_prep, analytics, report, app) import without installing.
