"""
App layer: HTML 서버 (FastAPI + Jinja2).

역할:
- 홈 / 404 페이지 렌더링, /static 정적 파일
- 미구현 prefix (/auth, /v2) 스텁
- 리스너 위에서 uvicorn 실행, 신호 처리, graceful shutdown

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (layouts/, includes/)
- src/render/templateset.py → 템플릿 로드/컴파일 코드
"""
