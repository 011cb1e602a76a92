import enum


class PublicationType(str, enum.Enum):
    journal = "journal"
    conference = "conference"
    book = "book"
    book_chapter = "book_chapter"
    preprint = "preprint"
    report = "report"
