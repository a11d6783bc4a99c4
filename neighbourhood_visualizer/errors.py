class NeighbourhoodError(Exception):
    """Base class for failures raised while computing or drawing a neighbourhood."""


class InvalidParametersError(NeighbourhoodError, ValueError):
    """The parameter record cannot produce a block (e.g. no lot fits)."""


class AreaReconciliationError(NeighbourhoodError, RuntimeError):
    """Land-use areas do not add up to the tiled area. Always a derivation bug."""

    def __init__(self, expected_area_in_sqm, calculated_area_in_sqm):
        self.expected_area_in_sqm = expected_area_in_sqm
        self.calculated_area_in_sqm = calculated_area_in_sqm
        super().__init__(
            f"Land-use areas do not reconcile: expectedArea={expected_area_in_sqm}, "
            f"calculatedArea={calculated_area_in_sqm}"
        )


class PrimitiveBudgetExceeded(NeighbourhoodError, RuntimeError):
    """Drawing the layout would take more buildings than allowed."""

    def __init__(self, requested, maximum):
        self.requested = requested
        self.maximum = maximum
        super().__init__(
            f"Not drawing layout, too many buildings. Would draw {requested}, "
            f"the max is {maximum}. Parameters are probably bad"
        )
