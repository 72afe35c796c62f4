from countrydistance.errors import ResolutionError


class FakeResolver:
    def __init__(self, codes, failures=()):
        self.codes = dict(codes)
        self.failures = set(failures)
        self.calls = []

    def resolve(self, latitude, longitude):
        key = (round(latitude, 4), round(longitude, 4))
        self.calls.append(key)
        if key in self.failures or key not in self.codes:
            raise ResolutionError(f"no country_code for {key}")
        return self.codes[key]


def activity(lat_e7, lon_e7, distance, timestamp):
    return {
        "activitySegment": {
            "startLocation": {"latitudeE7": lat_e7, "longitudeE7": lon_e7},
            "endLocation": {"latitudeE7": lat_e7 + 1000, "longitudeE7": lon_e7 + 1000},
            "distance": distance,
            "duration": {"startTimestamp": timestamp},
        }
    }
