"""CLI command athlete: show the authenticated Strava athlete."""

from stravatrack.core import Stravatrack


def run() -> None:
    with Stravatrack() as st:
        source = st.strava
        if source is None:
            print("No Strava access token. Set STRAVA_ACCESS_TOKEN in your environment or .env file.")
            return

        athlete = source.get_athlete()
        name = f"{athlete.get('firstname', '')} {athlete.get('lastname', '')}".strip()
        print(f"Athlete: {name or 'unknown'} (id {athlete.get('id')})")
        location = ", ".join(str(part) for part in (athlete.get("city"), athlete.get("country")) if part)
        if location:
            print(f"Location: {location}")
        for bike in athlete.get("bikes") or []:
            print(f"  Bike: {bike.get('name')}")
        for shoe in athlete.get("shoes") or []:
            print(f"  Shoes: {shoe.get('name')}")
