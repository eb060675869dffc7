"""
Test Suite for querystudy

- Query catalogue (기본 문법 / 조인 / 서브쿼리 / 프로젝션 / 동적 쿼리 / 벌크 연산)
- Repository CRUD and custom search/paging
- Service layer logic
- Async engine and session management
"""
