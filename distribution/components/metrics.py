from prometheus_client import Gauge

CONTRACT_CALLS = Gauge("distribution_contract_calls", "Contract calls", ["method", "status"])
READ_VALUE = Gauge("distribution_read_value", "Last value read", ["method", "account"])
START_TIME = Gauge("distribution_start_time", "Configured distribution start time")
SCENARIO_STEPS = Gauge("distribution_scenario_steps", "Scenario steps", ["step", "status"])
