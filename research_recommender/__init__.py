# research_recommender/__init__.py

"""
연구 논문 추천 엔진 패키지 루트.

- rule_based: content-based / collaborative / trending 스코어러 + hybrid 결합
- service.pipeline: algorithm 태그 → 전략 디스패치 (get_recommendations)
- data: MongoDB(research, userprofiles, interactions) 로더와 mock 데이터
- interface: 서버에서 호출하는 추천 / 상호작용 로그 API

엔진 자체는 I/O 없이 호출마다 입력만 가지고 점수를 계산한다.
"""
