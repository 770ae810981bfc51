import logging
import random
import sys

from fastapi import Depends, FastAPI
from faker import Faker

from datatables_ssp import ResponseEncoder, ReturnData, SentParameters, get_sent_parameters

# ----------------------
# Settings
# ----------------------
STUDENT_COUNT = 1000
FAKER_SEED = 1234

logging.basicConfig(
    stream=sys.stdout,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("datatables_ssp.example")


# ----------------------
# In-memory table
# ----------------------
def make_students(count: int, seed: int) -> list[list[str]]:
    faker = Faker()
    faker.seed_instance(seed)
    rng = random.Random(seed)
    return [
        [str(student_id), faker.name(), str(rng.randint(18, 25)), faker.unique.email()]
        for student_id in range(1, count + 1)
    ]


STUDENTS = make_students(STUDENT_COUNT, FAKER_SEED)

# ----------------------
# FastAPI app
# ----------------------
app = FastAPI()
encoder = ResponseEncoder()


def build_page(params: SentParameters) -> ReturnData:
    if params.start < 0:
        return ReturnData(
            draw=params.draw,
            records_total=len(STUDENTS),
            records_filtered=len(STUDENTS),
            error="start must not be negative",
        )

    if params.is_all_rows:
        rows = STUDENTS[params.start:]
    else:
        rows = STUDENTS[params.start:params.start + max(params.length, 0)]

    return ReturnData(
        draw=params.draw,
        records_total=len(STUDENTS),
        records_filtered=len(STUDENTS),
        rows=rows,
    )


# ----------------------
# Students table (query string, form body or JSON body)
# ----------------------
@app.get("/students")
@app.post("/students")
async def get_students(params: SentParameters = Depends(get_sent_parameters)):
    logger.info("draw=%s start=%s length=%s", params.draw, params.start, params.length)
    return encoder.response(build_page(params))
