"""

샘플 회원 데이터 생성 스크립트.

- 페이징 API(/members?page=&size=&sort=)를 눈으로 확인하기 위한 용도
- member0 ~ member99 (나이 0 ~ 99) 회원 100명을 생성한다.
- 이미 회원이 있으면 생성하지 않고 종료한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.init_members
- 생성할 회원 수 변경: INIT_MEMBERS_COUNT=30 python -m scripts.init_members

"""

import os
from dotenv import load_dotenv
load_dotenv()

from app.db.auditing import auditor_context
from app.db.session import SessionLocal
from app.repositories.member_repository import MemberRepository
from app.services.member import init_members



def main():
    db = SessionLocal()
    try:
        if MemberRepository(db).count() > 0:
            print("✅ members already exist. Skip creation.")
            return

        count = int(os.environ.get("INIT_MEMBERS_COUNT", "100"))
        with auditor_context("init-script"):
            init_members(db, count=count)
            db.commit()

        print(f"🚀 {count} members created")

    finally:
        db.close()


if __name__ == "__main__":
    main()
