"""
Policy Simulation Engine ("what-if" digital twin).

Projects what a mandatory biometric update policy would demand:
- Target population above a chosen age threshold
- Daily throughput needed to finish within the grace period
- Load against national daily processing capacity
- Budget impact in crores

Stateless: every result is a pure function of the age pools and the
simulation parameters.
"""
from typing import Dict, List, Optional

from aadhaar_insight.schemas.metrics import (
    AgePopulationPools,
    SimulationParameters,
    SimulationResult,
    SweepPoint,
)
from aadhaar_insight.utils.formatters import (
    format_crores,
    format_daily_load,
    format_millions,
    format_percentage,
)


class PolicySimulationEngine:
    """
    Load and cost projector for age-targeted update mandates.

    Only three enrolment buckets exist (0-5, 5-18, 18+), so ages above 18
    use a linear decay of the adult pool down to zero at age 80. This is an
    approximation; no finer age distribution is available to replace it.
    """

    DEFAULT_DAILY_CAPACITY = 1_000_000  # updates/day, national, standard staffing
    DEFAULT_UNIT_COST = 50  # ₹ per update transaction
    DEFAULT_NATIONAL_POPULATION = 1_400_000_000

    DAYS_PER_MONTH = 30
    RUPEES_PER_CRORE = 10_000_000
    CHILD_AGE_LIMIT = 5
    ADULT_AGE = 18
    MAX_AGE = 80
    AGE_STEP = 5

    def __init__(self,
                 base_daily_capacity: float = DEFAULT_DAILY_CAPACITY,
                 unit_cost: float = DEFAULT_UNIT_COST,
                 national_population: float = DEFAULT_NATIONAL_POPULATION):
        """
        Initialize the simulation engine.

        Args:
            base_daily_capacity: Updates the system processes per day at surge 1.0
            unit_cost: Operational cost per update in rupees
            national_population: Denominator for the population coverage gauge
        """
        self.base_daily_capacity = base_daily_capacity
        self.unit_cost = unit_cost
        self.national_population = national_population

    def estimate_target_volume(self, pools: AgePopulationPools, min_age: int) -> float:
        """
        Estimate how many residents a mandate from `min_age` upward covers.

        - min_age < 5: every pool
        - min_age < 18: youth + adult pools
        - otherwise: adult pool scaled by (80 - min_age) / (80 - 18), floored at 0
        """
        if min_age < self.CHILD_AGE_LIMIT:
            return pools.child_pool + pools.youth_pool + pools.adult_pool
        if min_age < self.ADULT_AGE:
            return pools.youth_pool + pools.adult_pool

        ratio = max(0, (self.MAX_AGE - min_age) / (self.MAX_AGE - self.ADULT_AGE))
        return pools.adult_pool * ratio

    def simulate(self,
                 pools: AgePopulationPools,
                 params: Optional[SimulationParameters] = None) -> SimulationResult:
        """
        Run one what-if scenario.

        Args:
            pools: Age-bucket enrolment totals
            params: Policy assumptions (defaults: age 18, 6 months, standard staffing)

        Returns:
            SimulationResult; is_critical when load exceeds 100% of capacity
        """
        params = params or SimulationParameters()

        target_volume = self.estimate_target_volume(pools, params.min_age)

        system_capacity = self.base_daily_capacity * params.surge_capacity
        daily_load = target_volume / (params.grace_months * self.DAYS_PER_MONTH)
        load_percentage = daily_load / system_capacity * 100

        cost_in_crores = target_volume * self.unit_cost / self.RUPEES_PER_CRORE

        return SimulationResult(
            target_volume=target_volume,
            daily_load=daily_load,
            load_percentage=load_percentage,
            cost_in_crores=cost_in_crores,
            is_critical=load_percentage > 100,
            system_capacity_daily=system_capacity,
            population_coverage_pct=min(100.0, target_volume / self.national_population * 100),
            load_bar_pct=min(100.0, load_percentage)
        )

    def sweep_min_age(self,
                      pools: AgePopulationPools,
                      grace_months: int = 6,
                      surge_capacity: float = 1.0) -> List[SweepPoint]:
        """Simulate every selectable age threshold (0 to 80, step 5)."""
        points = []
        for age in range(0, self.MAX_AGE + 1, self.AGE_STEP):
            params = SimulationParameters(
                min_age=age,
                grace_months=grace_months,
                surge_capacity=surge_capacity
            )
            points.append(SweepPoint(min_age=age, result=self.simulate(pools, params)))
        return points

    @staticmethod
    def describe(result: SimulationResult) -> Dict[str, str]:
        """Display strings for the simulator cards."""
        return {
            "target_population": format_millions(result.target_volume),
            "budget_impact": format_crores(result.cost_in_crores),
            "load": format_percentage(result.load_percentage),
            "daily_load": format_daily_load(result.daily_load),
            "status": "Critical Overload" if result.is_critical else "Within Capacity"
        }


def simulate(pools: AgePopulationPools, params: Optional[SimulationParameters] = None) -> SimulationResult:
    """Convenience function using the default baselines."""
    return PolicySimulationEngine().simulate(pools, params)
