import pytest

from gradex.models import ScoredCourse


@pytest.fixture
def first_semester():
    return [
        ScoredCourse("MTH101", 3, 65, title="General Mathematics I", level="100", semester="1st"),
        ScoredCourse("CHM101", 4, 72, title="General Chemistry I", level="100", semester="1st"),
        ScoredCourse("PHY101", 3, 58, title="General Physics I", level="100", semester="1st"),
    ]


@pytest.fixture
def second_semester():
    return [
        ScoredCourse("STA102", 3, 45, level="100", semester="2nd"),
        ScoredCourse("BIO102", 2, 30, level="100", semester="2nd"),
    ]
