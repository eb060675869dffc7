"""
querystudy - SQLAlchemy 2.0 query construction patterns

Member/Team 엔티티 위에서 조인, 서브쿼리, 프로젝션, 동적 쿼리, 벌크 연산,
SQL 함수 호출을 select() 표현식으로 작성하는 방법을 모아둔 패키지.
"""

__version__ = "1.0.0"
