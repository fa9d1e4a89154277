from prometheus_client import Counter, Histogram


class AdmissionMetrics:
    """
    Ticket admission core metrics collector

    Counts issuance, seat allocation and scan outcomes. Check-in statistics for
    reporting come from the database read model, not from these counters.
    """

    def __init__(self):
        # ========== Issuance Metrics ==========
        self.tickets_issued = Counter(
            'tickets_issued_total',
            'Tickets persisted by the issuer',
        )

        self.ticket_issue_failures = Counter(
            'ticket_issue_failures_total',
            'Ticket units that could not be issued',
            ['reason'],  # reason: number_conflict/persistence
        )

        # ========== Seat Allocation Metrics ==========
        self.seat_allocations = Counter(
            'seat_allocations_total',
            'Seat allocation attempts',
            ['result'],  # result: success/insufficient
        )

        self.seats_released = Counter(
            'seats_released_total',
            'Seats returned to the available pool',
        )

        # ========== Check-in Metrics ==========
        self.scan_outcomes = Counter(
            'scan_outcomes_total',
            'Scan attempts by result',
            ['result'],
        )

        self.scan_duration = Histogram(
            'scan_validation_duration_seconds',
            'Time to validate one scanned credential',
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

    # ========== Helper Methods ==========

    def record_tickets_issued(self, *, count: int) -> None:
        if count:
            self.tickets_issued.inc(count)

    def record_issue_failure(self, *, reason: str, count: int = 1) -> None:
        self.ticket_issue_failures.labels(reason=reason).inc(count)

    def record_seat_allocation(self, *, result: str) -> None:
        self.seat_allocations.labels(result=result).inc()

    def record_seats_released(self, *, count: int) -> None:
        if count:
            self.seats_released.inc(count)

    def record_scan(self, *, result: str, duration: float) -> None:
        self.scan_outcomes.labels(result=result).inc()
        self.scan_duration.observe(duration)


# Global metrics instance
metrics = AdmissionMetrics()
