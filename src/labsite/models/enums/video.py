import enum


class VideoCategory(str, enum.Enum):
    lecture = "lecture"
    interview = "interview"
    presentation = "presentation"
    documentary = "documentary"
    tutorial = "tutorial"
    webinar = "webinar"
    other = "other"


class VideoAuthorRole(str, enum.Enum):
    presenter = "presenter"
    host = "host"
    guest = "guest"
    producer = "producer"
    contributor = "contributor"
