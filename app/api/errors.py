from fastapi import HTTPException, status

SEARCH_FAILED = "Could not search for available stays. Please try again."
GENERIC_FAILURE = "Something went wrong. Please try again."
ROOM_TAKEN = "Sorry, someone else just booked the last room for these dates."


def store_unavailable(detail: str = GENERIC_FAILURE) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
