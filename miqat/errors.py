class MiqatError(ValueError):
    pass


class InvalidLocation(MiqatError):
    pass


class UnknownMethod(MiqatError):
    pass


class UnknownBackend(MiqatError):
    pass


class UnknownCity(MiqatError):
    pass


class PrayerTimeUnavailable(MiqatError):
    """The sun never reaches the angle a prayer is defined by on that date.

    Happens at high latitudes around the solstices. ``prayer`` is filled in
    by the engine; the solver itself only knows the angle.
    """

    def __init__(self, prayer=None, cosine=None, angle=None):
        self.prayer = prayer
        self.cosine = cosine
        self.angle = angle
        what = prayer or "prayer time"
        detail = []
        if angle is not None:
            detail.append(f"angle {angle:g}")
        if cosine is not None:
            detail.append(f"cos(H)={cosine:.4f}")
        suffix = f" ({', '.join(detail)})" if detail else ""
        super().__init__(f"{what} is unavailable: the sun does not reach the required angle{suffix}")

    def for_prayer(self, prayer):
        return PrayerTimeUnavailable(prayer, self.cosine, self.angle)
