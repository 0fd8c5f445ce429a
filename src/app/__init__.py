"""
App layer: HTTP 서버 통합 (FastAPI).

역할:
- Settings → 미들웨어 (request id, 헤더, gzip, 접근 로그)
- 뷰 엔진 → HTML 응답
- Settings → uvicorn 설정
- ⚠️ 설정 해석/뷰 컴파일 로직 없음 (settings, views에 위임)

주의: 폴더 구분
- src/views/ → 뷰 엔진 코드
- views/ (루트) → 템플릿 파일
"""
