import cpusched


def test_star_import_exposes_engine_only():
    namespace = {}
    exec("from cpusched import *", namespace)
    assert "cli" not in namespace
    assert {"IDLE", "Policy", "Process", "run_algorithm", "run_schedule"} <= set(namespace)
    assert "cli" not in cpusched.__all__
