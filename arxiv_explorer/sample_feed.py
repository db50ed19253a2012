"""
Bundled Atom feed served when arXiv cannot be reached (or offline mode is on).
"""

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>arXiv sample feed</title>
  <entry>
    <id>http://arxiv.org/abs/2304.01626v3</id>
    <title>Machine Learning Applications in Computer Vision</title>
    <summary>This sample paper demonstrates applications of machine learning techniques to various computer vision problems, including object detection, image segmentation, and scene recognition.</summary>
    <published>2023-04-03T17:50:14Z</published>
    <updated>2023-04-03T17:50:14Z</updated>
    <author><name>John Smith</name></author>
    <author><name>Jane Doe</name></author>
    <category term="cs.LG"/>
    <category term="cs.AI"/>
    <category term="cs.CV"/>
    <link title="pdf" href="http://arxiv.org/pdf/2304.01626v3.pdf"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2304.01627v1</id>
    <title>Deep Learning Architectures for Natural Language Processing</title>
    <summary>This research explores innovative transformer-based architectures for natural language processing tasks, including sentiment analysis, question answering, and machine translation.</summary>
    <published>2023-04-03T18:20:45Z</published>
    <updated>2023-04-03T18:20:45Z</updated>
    <author><name>Alice Johnson</name></author>
    <author><name>Bob Williams</name></author>
    <category term="cs.LG"/>
    <category term="cs.CL"/>
    <link title="pdf" href="http://arxiv.org/pdf/2304.01627v1.pdf"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2304.01628v2</id>
    <title>Quantum Computing Advances</title>
    <summary>A comprehensive review of recent advances in quantum computing algorithms, including Shor's algorithm implementations and quantum error correction techniques.</summary>
    <published>2023-04-04T09:15:30Z</published>
    <updated>2023-04-04T09:15:30Z</updated>
    <author><name>David Miller</name></author>
    <author><name>Sarah Chen</name></author>
    <category term="quant-ph"/>
    <category term="cs.ET"/>
    <link title="pdf" href="http://arxiv.org/pdf/2304.01628v2.pdf"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2304.01629v1</id>
    <title>Cybersecurity Threat Analysis using Machine Learning</title>
    <summary>This paper explores applications of machine learning for detecting and mitigating cybersecurity threats in networked systems, with emphasis on anomaly detection and behavior analysis.</summary>
    <published>2023-04-04T10:45:22Z</published>
    <updated>2023-04-04T10:45:22Z</updated>
    <author><name>Michael Chen</name></author>
    <author><name>Laura Rodriguez</name></author>
    <category term="cs.CR"/>
    <category term="cs.LG"/>
    <link title="pdf" href="http://arxiv.org/pdf/2304.01629v1.pdf"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2304.01630v1</id>
    <title>Social Network Analysis Techniques</title>
    <summary>A survey of current methodologies for social network analysis, including community detection, influence propagation, and sentiment analysis in online communities.</summary>
    <published>2023-04-04T14:20:11Z</published>
    <updated>2023-04-04T14:20:11Z</updated>
    <author><name>Emily Taylor</name></author>
    <category term="cs.SI"/>
    <category term="cs.CY"/>
    <link title="pdf" href="http://arxiv.org/pdf/2304.01630v1.pdf"/>
  </entry>
</feed>
"""

SAMPLE_TOPIC = "Sample Results"
